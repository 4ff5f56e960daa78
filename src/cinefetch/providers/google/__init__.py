"""
cinefetch.providers.google - Google Gemini provider.

Provides reasoning with structured output via the Gemini API
(response_schema). This is the default provider for AI extraction.

Example:
    >>> from cinefetch.providers.registry import get_provider
    >>> provider = get_provider("google")
    >>> data = await provider.reason(messages, schema=VideoExtractionResult)
"""

from cinefetch.providers.google.client import GoogleProvider

__all__ = ["GoogleProvider"]
