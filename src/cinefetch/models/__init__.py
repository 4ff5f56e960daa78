"""
Data models for cinefetch.

Provides the ExtractedLink value model, platform labels, and the
per-run extraction outcome.
"""

from cinefetch.models.extracted_link import ExtractedLink, Platform
from cinefetch.models.outcome import (
    ExtractionMode,
    ExtractionOutcome,
    ExtractionStatus,
)

__all__ = [
    "ExtractedLink",
    "Platform",
    "ExtractionMode",
    "ExtractionOutcome",
    "ExtractionStatus",
]
