"""
Export helpers for extraction results.

Produces the clipboard text (one URL per line) and the plain-text report:

    Platform: YouTube
    Title: Unknown
    URL: https://youtu.be/dQw4w9WgXcQ
    Context: N/A
    ---

Every field is written on one line and records are separated by a blank
line. parse_report() reads the same format back.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from cinefetch.config.defaults import EXPORT_FILE_PREFIX
from cinefetch.config.loader import get_export_dir
from cinefetch.models.extracted_link import ExtractedLink

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

UNKNOWN_TITLE = "Unknown"
NO_CONTEXT = "N/A"
RECORD_SEPARATOR = "\n\n"

_RECORD_END_RE = re.compile(r"^---[ \t]*$", re.MULTILINE)
_FIELD_RE = re.compile(r"^(Platform|Title|URL|Context): ?(.*)$")
_LINE_BREAK_RE = re.compile(r"\s*[\r\n]+\s*")


def links_to_clipboard_text(links: Iterable[ExtractedLink]) -> str:
    """Join link URLs with newlines, for copying to the clipboard."""
    return "\n".join(link.url for link in links)


def _one_line(value: str | None) -> str:
    return _LINE_BREAK_RE.sub(" ", value or "").strip()


def format_record(link: ExtractedLink) -> str:
    """Format one link as a report record (ending with the --- line).

    Line breaks inside a field are folded into single spaces, so a field
    can never contain the record terminator.
    """
    return (
        f"Platform: {_one_line(link.platform)}\n"
        f"Title: {_one_line(link.title) or UNKNOWN_TITLE}\n"
        f"URL: {_one_line(link.url)}\n"
        f"Context: {_one_line(link.context) or NO_CONTEXT}\n"
        "---"
    )


def format_report(links: Iterable[ExtractedLink]) -> str:
    """Format links as the plain-text export report."""
    return RECORD_SEPARATOR.join(format_record(link) for link in links)


def parse_report(text: str) -> list[ExtractedLink]:
    """Parse a report produced by format_report() back into links.

    "Unknown" titles and "N/A" contexts come back as absent. A hand-edited
    context may span several lines; everything after "Context: " up to the
    record's closing --- belongs to it.

    Raises:
        ValueError: If a record lacks the Platform or URL field.
    """
    links: list[ExtractedLink] = []

    for chunk in _RECORD_END_RE.split(text):
        chunk = chunk.strip("\n")
        if not chunk.strip():
            continue

        fields: dict[str, str] = {}
        current: str | None = None
        for line in chunk.split("\n"):
            match = _FIELD_RE.match(line)
            if match and (match.group(1) not in fields):
                current = match.group(1)
                fields[current] = match.group(2)
            elif current == "Context":
                fields["Context"] += "\n" + line

        if "Platform" not in fields or "URL" not in fields:
            raise ValueError(f"Malformed report record: {chunk[:80]!r}")

        title = fields.get("Title")
        context = fields.get("Context")
        links.append(
            ExtractedLink(
                url=fields["URL"],
                platform=fields["Platform"],
                title=None if title in (None, UNKNOWN_TITLE) else title,
                context=None if context in (None, NO_CONTEXT) else context,
            )
        )

    return links


def export_filename(now: datetime | None = None) -> str:
    """Build the export file name, e.g. cinefetch_export_1700000000000.txt."""
    now = now or datetime.now()
    return f"{EXPORT_FILE_PREFIX}{int(now.timestamp() * 1000)}.txt"


def write_report(
    links: Iterable[ExtractedLink],
    directory: Path | None = None,
    now: datetime | None = None,
) -> Path:
    """Write the export report to a timestamped file.

    Args:
        links: Links to export.
        directory: Target directory. Defaults to the configured export_dir.
        now: Timestamp used in the file name. Defaults to the current time.

    Returns:
        Path of the written file.
    """
    if directory is None:
        directory = get_export_dir()
    else:
        directory.mkdir(parents=True, exist_ok=True)

    links = list(links)
    path = directory / export_filename(now)
    path.write_text(format_report(links), encoding="utf-8")
    logger.info(f"Exported {len(links)} link(s) to {path}")
    return path
