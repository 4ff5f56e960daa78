"""
Input helpers: turn uploaded or dropped files into extraction text.

Files are decoded strictly as UTF-8 (a leading byte-order mark is dropped).
Anything that cannot be read or decoded raises UnreadableFileError rather
than being silently ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cinefetch.exceptions import UnreadableFileError

logger = logging.getLogger(__name__)

TEXT_ENCODING = "utf-8-sig"


def decode_text(data: bytes, name: str = "<upload>") -> str:
    """Decode uploaded bytes as UTF-8 text.

    Args:
        data: Raw file contents.
        name: File name used in error messages.

    Returns:
        Decoded text.

    Raises:
        UnreadableFileError: If data is not valid UTF-8 or contains NUL bytes.
    """
    if b"\x00" in data:
        raise UnreadableFileError(name, f"'{name}' looks like a binary file, not text")
    try:
        return data.decode(TEXT_ENCODING)
    except UnicodeDecodeError as e:
        raise UnreadableFileError(
            name, f"'{name}' is not valid UTF-8 text (byte {e.start})"
        ) from e


def read_text_file(path: str | Path) -> str:
    """Read a file from disk as extraction input.

    Raises:
        UnreadableFileError: If the file cannot be opened or decoded.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise UnreadableFileError(str(path), f"Cannot read '{path}': {e.strerror or e}") from e

    text = decode_text(data, name=str(path))
    logger.debug(f"Read {len(text)} characters from {path}")
    return text
