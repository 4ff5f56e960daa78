"""
Rule-based link extraction.

Applies the platform rules to raw text with no external calls:
1. Scan the whole input once per rule, in rule order
2. Skip any literal match already emitted by an earlier rule or match
3. Attach a whitespace-collapsed context window to each accepted match

Never raises on malformed input; the worst case is an empty list.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from cinefetch.models.extracted_link import ExtractedLink
from cinefetch.rules import DEFAULT_RULES

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cinefetch.rules import PlatformRule

logger = logging.getLogger(__name__)

# Characters of source text kept on each side of a match
CONTEXT_RADIUS = 50

# Marker added where the context window was cut short of the input bounds
ELLIPSIS = "..."

_WHITESPACE_RE = re.compile(r"\s+")


def build_context(text: str, start: int, end: int, radius: int = CONTEXT_RADIUS) -> str:
    """Build the context snippet around text[start:end].

    The window spans up to ``radius`` characters either side of the match,
    clamped to the input. Whitespace runs collapse to one space. An ellipsis
    marks each side where the window stops short of the input's edge.

    Args:
        text: Full input text.
        start: Match start offset.
        end: Match end offset (exclusive).
        radius: Characters to keep before and after the match.

    Returns:
        The context snippet.
    """
    window_start = max(0, start - radius)
    window_end = min(len(text), end + radius)

    snippet = _WHITESPACE_RE.sub(" ", text[window_start:window_end]).strip()
    if window_start > 0:
        snippet = ELLIPSIS + snippet
    if window_end < len(text):
        snippet = snippet + ELLIPSIS
    return snippet


def extract_links(
    text: str,
    rules: Iterable[PlatformRule] | None = None,
) -> list[ExtractedLink]:
    """Extract video links from text using the platform rules.

    Args:
        text: Raw input text of any length.
        rules: Rules in precedence order. Defaults to DEFAULT_RULES.

    Returns:
        Links in discovery order (rule order, then position). URLs are unique
        by exact string equality; an empty list means nothing was found.
    """
    if rules is None:
        rules = DEFAULT_RULES

    links: list[ExtractedLink] = []
    seen: set[str] = set()

    for rule in rules:
        accepted = 0
        for match in rule.finditer(text):
            url = match.group(0)
            if url in seen:
                continue
            seen.add(url)
            links.append(
                ExtractedLink(
                    url=url,
                    platform=rule.name,
                    context=build_context(text, match.start(), match.end()),
                )
            )
            accepted += 1
        if accepted:
            logger.debug(f"Rule {rule.name}: {accepted} link(s)")

    return links
