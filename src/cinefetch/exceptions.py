"""
Custom exceptions for cinefetch.

All cinefetch exceptions inherit from CinefetchError for easy catching.
"""

from __future__ import annotations

from typing import Any


class CinefetchError(Exception):
    """Base exception for all cinefetch errors."""

    pass


class InputEmptyError(CinefetchError):
    """No text was provided to an extraction run."""

    def __init__(self, message: str = "Please provide some text or a file to process."):
        super().__init__(message)
        self.message = message


class ExtractionBusyError(CinefetchError):
    """A run was requested while a previous run is still in flight."""

    def __init__(self, message: str = "An extraction is already in progress."):
        super().__init__(message)
        self.message = message


class ExtractionServiceError(CinefetchError):
    """AI extraction failed (transport error, unparseable or non-conformant response).

    Attributes:
        message: Human-readable error message
        provider: Name of the AI provider that was called, if known
        details: Additional diagnostic information
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a structured dict for host surfaces."""
        result: dict[str, Any] = {
            "type": self.__class__.__name__,
            "message": self.message,
        }
        if self.provider:
            result["provider"] = self.provider
        if self.details:
            result["details"] = self.details
        return result


class UnreadableFileError(CinefetchError):
    """A supplied file could not be read or decoded as text."""

    def __init__(self, path: str, message: str | None = None):
        self.path = path
        msg = message or f"Could not read '{path}' as text"
        super().__init__(msg)
