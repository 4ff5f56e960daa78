"""
Extraction modes, terminal statuses and the per-run outcome record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from cinefetch.models.extracted_link import ExtractedLink


class ExtractionMode(Enum):
    """Which extractor a run uses. Modes are mutually exclusive."""

    DETERMINISTIC = "deterministic"
    AI = "ai"

    @classmethod
    def _missing_(cls, value):
        # Accept "AI", " Deterministic " and similar spellings of a value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class ExtractionStatus(Enum):
    """Terminal state of a run."""

    SUCCESS = "success"  # one or more links
    EMPTY = "empty"  # ran fine, nothing found (informational)
    FAILED = "failed"  # AI service failure
    INPUT_EMPTY = "input_empty"  # rejected before running
    BUSY = "busy"  # rejected, another run in flight

    @property
    def is_error(self) -> bool:
        return self is ExtractionStatus.FAILED

    @property
    def was_rejected(self) -> bool:
        return self in (ExtractionStatus.INPUT_EMPTY, ExtractionStatus.BUSY)


@dataclass
class ExtractionOutcome:
    """Result of one ExtractionCoordinator.run() call.

    ``message`` is the user-facing text for every non-success status;
    ``error`` carries underlying failure detail when available.
    """

    status: ExtractionStatus
    mode: ExtractionMode
    links: list[ExtractedLink] = field(default_factory=list)
    message: str | None = None
    error: str | None = None
    elapsed_sec: float = 0.0

    @property
    def count(self) -> int:
        return len(self.links)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "status": self.status.value,
            "mode": self.mode.value,
            "links": [link.model_dump() for link in self.links],
            "message": self.message,
            "error": self.error,
            "elapsed_sec": self.elapsed_sec,
        }
