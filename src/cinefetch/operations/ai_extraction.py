"""
AI-assisted link extraction.

Delegates extraction to an external Reasoner under a strict structured
output contract:
1. Truncate the input to a hard character cap
2. Send one request (instructions + VideoExtractionResult schema)
3. Validate the response against the schema; never coerce a bad payload

Any transport error, unparseable body or schema violation surfaces as
ExtractionServiceError. There is exactly one attempt per call, with no
retry and no timeout.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from cinefetch.config.defaults import AI_MAX_INPUT_CHARS
from cinefetch.exceptions import ExtractionServiceError
from cinefetch.providers.schemas import VideoExtractionResult

if TYPE_CHECKING:
    from cinefetch.models.extracted_link import ExtractedLink
    from cinefetch.providers.base import Reasoner

logger = logging.getLogger(__name__)

EXTRACTION_INSTRUCTIONS = """\
Extract all video links (YouTube, Vimeo, Twitch, TikTok, Instagram, \
DailyMotion, direct video files such as .mp4/.webm/.m3u8, etc.) from the \
text supplied by the user.

Also look for obfuscated links written out in words (e.g. \
"youtu dot be slash xyz" or "vimeo [dot] com / 12345") and rewrite them as \
real URLs.

For each video provide:
- url: the full, real URL
- platform: the hosting platform (e.g. "YouTube", "Vimeo", "DirectLink")
- context: a brief note on what the video might be about, if possible
- title: the video title, only if the text makes it clear

Report each link exactly once. If there are no video links, return an \
empty "videos" list."""

INPUT_HEADER = "INPUT TEXT:\n"


def truncate_input(text: str, max_chars: int = AI_MAX_INPUT_CHARS) -> str:
    """Cut text to at most max_chars characters."""
    if len(text) <= max_chars:
        return text
    logger.info(f"Truncating AI input from {len(text)} to {max_chars} characters")
    return text[:max_chars]


def build_extraction_messages(text: str, max_chars: int = AI_MAX_INPUT_CHARS) -> list[dict]:
    """Build the chat messages for one extraction request.

    Args:
        text: Raw input text.
        max_chars: Hard cap on input characters embedded in the request.

    Returns:
        System instructions followed by the (truncated) input as user message.
    """
    return [
        {"role": "system", "content": EXTRACTION_INSTRUCTIONS},
        {"role": "user", "content": INPUT_HEADER + truncate_input(text, max_chars)},
    ]


def parse_extraction_response(raw: Any, provider: str | None = None) -> VideoExtractionResult:
    """Validate a provider response against the extraction schema.

    Accepts either the parsed dict returned by Reasoner.reason() or a raw JSON
    string. A missing "videos" field yields an empty result.

    Args:
        raw: Provider response (dict or JSON string).
        provider: Provider name for error reporting.

    Returns:
        Validated VideoExtractionResult.

    Raises:
        ExtractionServiceError: If the payload is not valid JSON or does not
            conform to the schema.
    """
    try:
        if isinstance(raw, (str, bytes)):
            return VideoExtractionResult.model_validate_json(raw)
        return VideoExtractionResult.model_validate(raw)
    except ValidationError as e:
        raise ExtractionServiceError(
            f"AI response did not match the expected schema: {e.error_count()} error(s)",
            provider=provider,
            details={
                "errors": e.errors(include_url=False, include_context=False, include_input=False)
            },
        ) from e


class AIExtractionOrchestrator:
    """Extract video links by asking an AI Reasoner.

    Args:
        reasoner: Provider implementing Reasoner with structured output.
        model: Model override passed to the reasoner. None uses the
            provider's default.
        max_input_chars: Hard cap on characters sent per request.

    Example:
        >>> from cinefetch.providers import get_provider
        >>> orchestrator = AIExtractionOrchestrator(get_provider("google"))
        >>> links = await orchestrator.extract("watch youtu dot be slash dQw4w9WgXcQ")
    """

    def __init__(
        self,
        reasoner: Reasoner,
        model: str | None = None,
        max_input_chars: int = AI_MAX_INPUT_CHARS,
    ):
        if max_input_chars <= 0:
            raise ValueError(f"max_input_chars must be positive, got {max_input_chars}")
        self.reasoner = reasoner
        self.model = model
        self.max_input_chars = max_input_chars

    @property
    def provider_name(self) -> str | None:
        info = getattr(self.reasoner, "info", None)
        return getattr(info, "name", None)

    async def extract(self, text: str) -> list[ExtractedLink]:
        """Run one AI extraction round trip.

        Args:
            text: Raw input text. Only the first max_input_chars characters
                are sent.

        Returns:
            Normalized links in the order the service reported them.
            Duplicates are not removed.

        Raises:
            ExtractionServiceError: On any request, parse or schema failure.
        """
        messages = build_extraction_messages(text, self.max_input_chars)
        kwargs = {"model": self.model} if self.model else {}

        try:
            raw = await self.reasoner.reason(messages, schema=VideoExtractionResult, **kwargs)
        except ExtractionServiceError:
            raise
        except json.JSONDecodeError as e:
            raise ExtractionServiceError(
                f"AI response was not valid JSON: {e}", provider=self.provider_name
            ) from e
        except Exception as e:
            raise ExtractionServiceError(
                f"AI extraction request failed: {e}",
                provider=self.provider_name,
                details={"error_type": type(e).__name__},
            ) from e

        result = parse_extraction_response(raw, provider=self.provider_name)
        logger.debug(f"AI extraction returned {len(result.videos)} link(s)")
        return [item.to_link() for item in result.videos]
