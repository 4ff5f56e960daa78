"""
cinefetch.providers.capabilities - Provider metadata and limits.

Classes:
    ProviderInfo: Immutable metadata about a provider's features and limits.

Example:
    >>> from cinefetch.providers.capabilities import PROVIDER_INFO
    >>> PROVIDER_INFO["google"].supports_structured_output
    True
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProviderInfo:
    """Immutable provider metadata.

    Attributes:
        name: Provider identifier (e.g., "google").
        default_model: Model used when none is configured.
        api_key_env: Environment variable holding the API key.
        supports_structured_output: Whether provider can return JSON matching a schema.
        max_context_tokens: Maximum context window size (None = unknown).
        cost_per_1m_input_tokens: Cost in USD per million input tokens (None = unknown).
        cost_per_1m_output_tokens: Cost in USD per million output tokens (None = unknown).
    """

    name: str
    default_model: str
    api_key_env: str
    supports_structured_output: bool = True
    max_context_tokens: int | None = None
    cost_per_1m_input_tokens: float | None = None
    cost_per_1m_output_tokens: float | None = None

    def estimate_input_cost(self, tokens: int) -> float | None:
        """Estimate USD cost of sending ``tokens`` input tokens."""
        if self.cost_per_1m_input_tokens is None:
            return None
        return tokens / 1_000_000 * self.cost_per_1m_input_tokens


PROVIDER_INFO: dict[str, ProviderInfo] = {
    "google": ProviderInfo(
        name="google",
        default_model="gemini-2.0-flash",
        api_key_env="GOOGLE_API_KEY",
        max_context_tokens=1_000_000,
        cost_per_1m_input_tokens=0.10,
        cost_per_1m_output_tokens=0.40,
    ),
}


__all__ = [
    "ProviderInfo",
    "PROVIDER_INFO",
]
