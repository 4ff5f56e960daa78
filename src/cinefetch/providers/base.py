"""
cinefetch.providers.base - Abstract base class and protocol for providers.

This module defines the contracts that AI providers must implement to take
part in AI link extraction.

Classes:
    Provider: Abstract base class for all AI providers.

Protocols:
    Reasoner: Protocol for text reasoning with optional structured output.

Example:
    >>> from cinefetch.providers.base import Provider, Reasoner
    >>> class MyProvider(Provider, Reasoner):
    ...     @property
    ...     def info(self) -> ProviderInfo:
    ...         return ProviderInfo(name="my-provider")
    ...     def is_available(self) -> bool:
    ...         return True
    ...     async def reason(self, messages, schema=None, **kwargs):
    ...         ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cinefetch.providers.capabilities import ProviderInfo


class Provider(ABC):
    """Abstract base class for all AI providers.

    Attributes:
        info: Provider metadata including limits and feature flags.
    """

    @property
    @abstractmethod
    def info(self) -> ProviderInfo:
        """Return provider metadata and limits."""
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Check if provider is configured and ready.

        Verifies that the provider SDK is installed and an API key can be
        resolved.

        Returns:
            True if the provider can be used, False otherwise.
        """
        ...


@runtime_checkable
class Reasoner(Protocol):
    """Protocol for text reasoning/chat completion.

    Implemented by the google provider (Gemini models).

    Example:
        >>> reasoner: Reasoner = get_provider("google")
        >>> messages = [
        ...     {"role": "system", "content": "Extract video links."},
        ...     {"role": "user", "content": "see youtu dot be slash dQw4w9WgXcQ"},
        ... ]
        >>> result = await reasoner.reason(messages, schema=VideoExtractionResult)
    """

    async def reason(
        self,
        messages: list[dict],
        schema: type | None = None,
        **kwargs,
    ) -> str | dict:
        """Generate text response, optionally with structured output.

        Args:
            messages: List of message dicts with "role" and "content" keys.
                Roles are "system", "user", "assistant".
            schema: Optional Pydantic model for structured output.
            **kwargs: Provider-specific options (e.g., model, max_tokens).

        Returns:
            str: Free-form text response if no schema provided.
            dict: Parsed JSON response if schema provided. The caller is
                responsible for validating it against the schema.
        """
        ...


__all__ = [
    "Provider",
    "Reasoner",
]
