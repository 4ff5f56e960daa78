"""
cinefetch.providers.schemas - Structured output schemas for AI providers.

Pydantic models that define the JSON schema enforced by provider structured
output features. They are passed to Reasoner.reason() via the ``schema``
parameter; the Gemini provider converts them into a ``response_schema``
(see providers.google.client.to_gemini_schema).

The same models validate the returned payload, so a response either parses
into a VideoExtractionResult or fails with a pydantic ValidationError.

Models:
    VideoLinkItem: One video link reported by the model.
    VideoExtractionResult: Complete AI extraction result.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from cinefetch.models.extracted_link import ExtractedLink


class VideoLinkItem(BaseModel):
    """A video link reported by the AI service.

    Attributes:
        url: Real, de-obfuscated URL.
        platform: Hosting platform label (free-form).
        context: Short description of what the video is about.
        title: Video title if it can be inferred.

    Example:
        >>> item = VideoLinkItem(
        ...     url="https://youtu.be/dQw4w9WgXcQ",
        ...     platform="YouTube",
        ...     context="Music video linked in the footer",
        ... )
    """

    url: str = Field(description="The full, real video URL")
    platform: str = Field(description="Hosting platform, e.g. YouTube, Vimeo, DirectLink")
    context: str | None = Field(
        default=None, description="Brief context of what the video is about"
    )
    title: str | None = Field(default=None, description="Video title if known")

    @field_validator("url", "platform")
    @classmethod
    def require_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("context", "title")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

    def to_link(self) -> ExtractedLink:
        """Normalize into the common ExtractedLink shape."""
        return ExtractedLink(
            url=self.url,
            platform=self.platform,
            context=self.context,
            title=self.title,
        )


class VideoExtractionResult(BaseModel):
    """Complete AI extraction result - schema for structured output.

    Attributes:
        videos: Video links found in the text. Defaults to empty when the
            response omits the field.
    """

    videos: list[VideoLinkItem] = Field(
        default_factory=list, description="All video links found in the text"
    )


__all__ = [
    "VideoLinkItem",
    "VideoExtractionResult",
]
