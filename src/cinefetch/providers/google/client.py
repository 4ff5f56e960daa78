"""
cinefetch.providers.google.client - GoogleProvider implementation.

Uses the Google Generative AI SDK (google-generativeai) for text reasoning
with structured output. The Gemini SDK is synchronous, so API calls are
wrapped in asyncio.run_in_executor().

Example:
    >>> provider = GoogleProvider()
    >>> result = await provider.reason(
    ...     [{"role": "user", "content": "Extract video links from ..."}],
    ...     schema=VideoExtractionResult,
    ... )
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from typing import Any

from cinefetch.providers.base import Provider, Reasoner
from cinefetch.providers.capabilities import PROVIDER_INFO, ProviderInfo

logger = logging.getLogger(__name__)

DEFAULT_MODEL = PROVIDER_INFO["google"].default_model

# JSON Schema keywords with no counterpart on Gemini's Schema proto
_UNSUPPORTED_SCHEMA_KEYS = frozenset({"title", "default", "additionalProperties"})


def to_gemini_schema(schema: type) -> dict[str, Any]:
    """Convert a Pydantic model into a response_schema dict Gemini accepts.

    Gemini's Schema is an OpenAPI subset: no $ref, no anyOf, no default.
    Nested models are inlined, Optional[X] becomes X with nullable=True, and
    unsupported keywords are dropped. Required fields are kept.

    Raises:
        ValueError: If the model uses a union other than Optional[X].
    """
    json_schema = schema.model_json_schema()
    defs = json_schema.pop("$defs", {})
    return _simplify_schema(json_schema, defs)


def _simplify_schema(node: Any, defs: dict[str, Any]) -> Any:
    if isinstance(node, list):
        return [_simplify_schema(item, defs) for item in node]
    if not isinstance(node, dict):
        return node

    ref = node.get("$ref")
    if ref is not None:
        return _simplify_schema(defs[ref.rsplit("/", 1)[-1]], defs)

    result: dict[str, Any] = {}
    any_of = node.get("anyOf")
    if any_of is not None:
        variants = [v for v in any_of if v != {"type": "null"}]
        if len(variants) != 1:
            raise ValueError(f"Gemini response_schema only supports Optional unions: {any_of}")
        result.update(_simplify_schema(variants[0], defs))
        if len(variants) < len(any_of):
            result["nullable"] = True

    for key, value in node.items():
        if key == "anyOf" or key in _UNSUPPORTED_SCHEMA_KEYS:
            continue
        if key == "properties":
            # Keys here are field names, not keywords
            result[key] = {name: _simplify_schema(prop, defs) for name, prop in value.items()}
        else:
            result[key] = _simplify_schema(value, defs)
    return result


class GoogleProvider(Provider, Reasoner):
    """Google Gemini provider for reasoning with structured output.

    Structured output converts Pydantic models with to_gemini_schema() and
    response_mime_type="application/json".

    Args:
        model: Model identifier. Defaults to "gemini-2.0-flash".
        api_key: Google API key. Defaults to GOOGLE_API_KEY env var.
        max_tokens: Default max output tokens for responses.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        max_tokens: int = 8192,
    ):
        self._model = model
        self._api_key = api_key
        self._max_tokens = max_tokens
        self._genai = None

    @property
    def info(self) -> ProviderInfo:
        return PROVIDER_INFO["google"]

    def _resolve_api_key(self) -> str | None:
        """Resolve API key from init arg or environment."""
        return self._api_key or os.environ.get("GOOGLE_API_KEY")

    def is_available(self) -> bool:
        """Check if the google-generativeai SDK is installed and API key is set."""
        try:
            import google.generativeai  # noqa: F401
        except ImportError:
            return False
        return self._resolve_api_key() is not None

    def _get_genai(self) -> Any:
        """Lazy-load and configure the Google GenAI module."""
        if self._genai is None:
            import google.generativeai as genai

            api_key = self._resolve_api_key()
            if not api_key:
                raise ValueError(
                    "GOOGLE_API_KEY not set. "
                    "Set the environment variable or pass api_key to the provider."
                )
            genai.configure(api_key=api_key)
            self._genai = genai
        return self._genai

    def _get_model(
        self,
        model_name: str,
        schema: type | None = None,
        max_tokens: int | None = None,
    ) -> Any:
        """Get a Gemini GenerativeModel with optional structured output config.

        Args:
            model_name: Gemini model identifier.
            schema: Optional Pydantic model for structured output.
            max_tokens: Optional max output tokens.

        Returns:
            A GenerativeModel instance.
        """
        genai = self._get_genai()
        config_kwargs: dict[str, Any] = {}

        if max_tokens is not None:
            config_kwargs["max_output_tokens"] = max_tokens

        if schema:
            config_kwargs["response_mime_type"] = "application/json"
            if hasattr(schema, "model_json_schema"):
                config_kwargs["response_schema"] = to_gemini_schema(schema)
            else:
                config_kwargs["response_schema"] = schema

        if config_kwargs:
            config = genai.GenerationConfig(**config_kwargs)
            return genai.GenerativeModel(model_name, generation_config=config)
        return genai.GenerativeModel(model_name)

    async def _generate_async(self, model: Any, content: list) -> Any:
        """Run synchronous generate_content in executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            lambda: model.generate_content(content),
        )

    async def _send_message_async(self, chat: Any, message: str) -> Any:
        """Run synchronous send_message in executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            lambda: chat.send_message(message),
        )

    async def reason(
        self,
        messages: list[dict],
        schema: type | None = None,
        **kwargs,
    ) -> str | dict:
        """Generate text response using Gemini.

        Converts standard message format to Gemini's role convention
        ("user"/"model" instead of "user"/"assistant"). System messages
        are prepended to the first user message.

        Args:
            messages: List of message dicts with "role" and "content" keys.
            schema: Optional Pydantic model for structured output via response_schema.
            **kwargs: Additional options:
                model (str): Override the default model.
                max_tokens (int): Override default max tokens.

        Returns:
            str if no schema, dict if schema provided.

        Raises:
            json.JSONDecodeError: If a structured response is not valid JSON.
        """
        model_name = kwargs.pop("model", None) or self._model
        max_tokens = kwargs.pop("max_tokens", self._max_tokens)

        system_parts: list[str] = []
        contents: list[dict[str, Any]] = []
        for msg in messages:
            role = msg.get("role", "user")
            text = msg["content"]

            if role == "system":
                system_parts.append(text)
            elif role == "assistant":
                contents.append({"role": "model", "parts": [text]})
            else:
                contents.append({"role": "user", "parts": [text]})

        if system_parts and contents:
            system_text = "\n".join(system_parts)
            first = contents[0]
            first["parts"] = [system_text + "\n\n" + first["parts"][0]]

        model = self._get_model(model_name, schema=schema, max_tokens=max_tokens)

        if len(contents) == 1:
            response = await self._generate_async(model, contents[0]["parts"])
        else:
            chat = model.start_chat(history=contents[:-1])
            last_message = contents[-1]["parts"][0]
            response = await self._send_message_async(chat, last_message)

        if schema:
            # Empty body means the model found nothing to report
            return json.loads(response.text or "{}")
        return response.text
