"""
cinefetch.providers - AI provider abstraction layer.

A Reasoner interface over Google Gemini for structured AI link extraction.
Further providers register in providers.registry.

Public API:
    get_provider(name: str) -> Provider
        Get a configured provider instance by name or alias.

    list_available() -> list[str]
        List all available (configured) provider names.

Example:
    >>> from cinefetch.providers import get_provider
    >>> provider = get_provider("gemini", model="gemini-2.0-flash")
"""

from __future__ import annotations

from cinefetch.providers.base import Provider, Reasoner
from cinefetch.providers.capabilities import PROVIDER_INFO, ProviderInfo
from cinefetch.providers.registry import (
    clear_cache,
    get_canonical_name,
    get_provider,
    list_all,
    list_available,
)
from cinefetch.providers.schemas import VideoExtractionResult, VideoLinkItem

__all__ = [
    "get_provider",
    "list_available",
    "list_all",
    "clear_cache",
    "get_canonical_name",
    "Provider",
    "Reasoner",
    "ProviderInfo",
    "PROVIDER_INFO",
    "VideoExtractionResult",
    "VideoLinkItem",
]
