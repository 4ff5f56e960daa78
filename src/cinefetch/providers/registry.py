"""
cinefetch.providers.registry - Provider discovery and instance management.

This module manages the registry of available providers, handling lazy loading,
caching, and provider discovery.

Functions:
    get_provider: Get a provider instance by name.
    list_available: List providers that are configured and ready.
    list_all: List all known provider names.
    clear_cache: Clear the provider instance cache.
    get_canonical_name: Resolve an alias to a canonical provider name.

Example:
    >>> from cinefetch.providers.registry import get_provider
    >>> provider = get_provider("gemini")
    >>> provider.info.name
    'google'
"""

from __future__ import annotations

import logging
from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cinefetch.providers.base import Provider

logger = logging.getLogger(__name__)


# Provider module mapping - maps canonical names to module paths
# Provider classes follow naming convention: {Name}Provider
# e.g., "google" -> GoogleProvider
PROVIDER_MODULES: dict[str, str] = {
    "google": "cinefetch.providers.google",
}


# Maps alias -> canonical name
PROVIDER_ALIASES: dict[str, str] = {
    "gemini": "google",
    "gemini-flash": "google",
    "gemini-2.0-flash": "google",
    "gemini-pro": "google",
}

_DEPENDENCY_HINTS: dict[str, str] = {
    "google": "pip install google-generativeai",
}


# Cached provider instances - keyed by canonical name
# Only caches instances created without custom kwargs
_cache: dict[str, Provider] = {}


def _resolve_name(name: str) -> str:
    """Resolve provider aliases to canonical names (case-insensitive)."""
    normalized = name.lower().strip()
    return PROVIDER_ALIASES.get(normalized, normalized)


def _canonical_to_class_name(canonical: str) -> str:
    """Convert canonical provider name to class name.

    Example:
        >>> _canonical_to_class_name("google")
        'GoogleProvider'
    """
    parts = canonical.split("-")
    return "".join(part.title() for part in parts) + "Provider"


def get_provider(name: str, **kwargs) -> Provider:
    """Get a provider instance by name.

    Providers are lazily loaded - the module is only imported when first
    requested. Instances are cached for reuse unless custom kwargs are
    provided.

    Args:
        name: Provider name or alias (e.g., "google", "gemini").
        **kwargs: Provider-specific configuration (e.g., model, api_key).
            If provided, instance is not cached.

    Returns:
        Provider instance ready for use.

    Raises:
        ValueError: If provider name is unknown.
        ImportError: If provider module fails to import.
    """
    canonical = _resolve_name(name)

    cache_key = canonical if not kwargs else None
    if cache_key and cache_key in _cache:
        logger.debug(f"Returning cached provider: {canonical}")
        return _cache[cache_key]

    if canonical not in PROVIDER_MODULES:
        available = ", ".join(sorted(PROVIDER_MODULES.keys()))
        raise ValueError(f"Unknown provider '{name}'. Available providers: {available}.")

    module_path = PROVIDER_MODULES[canonical]
    try:
        module = import_module(module_path)
    except ImportError as e:
        hint = _DEPENDENCY_HINTS.get(canonical, "check the provider documentation")
        raise ImportError(
            f"Failed to import provider '{canonical}' from {module_path}: {e}. "
            f"You may need to install dependencies: {hint}"
        ) from e

    class_name = _canonical_to_class_name(canonical)
    provider_class = getattr(module, class_name, None)
    if provider_class is None:
        raise ImportError(f"No class named '{class_name}' found in {module_path}.")

    try:
        instance = provider_class(**kwargs)
    except TypeError as e:
        raise TypeError(
            f"Failed to instantiate {class_name}: {e}. "
            f"Check that the kwargs match the provider's __init__ signature."
        ) from e

    if cache_key:
        _cache[cache_key] = instance
        logger.debug(f"Cached provider instance: {canonical}")

    logger.debug(f"Loaded provider: {canonical} ({class_name})")
    return instance


def list_available() -> list[str]:
    """List providers that are configured and ready to use.

    Returns:
        Sorted canonical names where is_available() returns True.
    """
    available = []

    for name in PROVIDER_MODULES:
        try:
            provider = get_provider(name)
        except ImportError as e:
            logger.debug(f"Provider '{name}' not available (import error): {e}")
            continue
        if provider.is_available():
            available.append(name)
        else:
            logger.debug(f"Provider '{name}' not available (is_available=False)")

    return sorted(available)


def list_all() -> list[str]:
    """List all known provider names, sorted alphabetically."""
    return sorted(PROVIDER_MODULES.keys())


def clear_cache() -> None:
    """Clear the provider instance cache."""
    _cache.clear()
    logger.debug("Provider cache cleared")


def get_canonical_name(name: str) -> str:
    """Get the canonical name for a provider.

    Raises:
        ValueError: If name doesn't map to a known provider.

    Example:
        >>> get_canonical_name("gemini")
        'google'
    """
    canonical = _resolve_name(name)
    if canonical not in PROVIDER_MODULES:
        available = ", ".join(sorted(PROVIDER_MODULES.keys()))
        raise ValueError(f"Unknown provider '{name}'. Available: {available}")
    return canonical


__all__ = [
    "get_provider",
    "list_available",
    "list_all",
    "clear_cache",
    "get_canonical_name",
    "PROVIDER_MODULES",
    "PROVIDER_ALIASES",
]
