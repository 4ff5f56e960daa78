"""
ExtractedLink model and the known platform labels.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Platform(str, Enum):
    """Platform labels assigned by the deterministic rule set.

    AI extraction may report labels outside this set; those are kept
    verbatim on ExtractedLink.platform.
    """

    YOUTUBE = "YouTube"
    VIMEO = "Vimeo"
    TWITCH = "Twitch"
    TIKTOK = "TikTok"
    INSTAGRAM = "Instagram"
    DAILYMOTION = "DailyMotion"
    DIRECT_LINK = "DirectLink"
    OTHER = "Other"


class ExtractedLink(BaseModel):
    """One discovered video reference.

    A value: two links with the same fields are equal. ``title`` is only
    ever populated by AI extraction.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Matched or AI-reported URL, verbatim")
    platform: str = Field(..., description="Hosting platform label")
    context: str | None = Field(None, description="Snippet of surrounding source text")
    title: str | None = Field(None, description="Video title (AI extraction only)")

    @property
    def is_known_platform(self) -> bool:
        """Check if the platform label is one of the built-in labels."""
        return self.platform in {p.value for p in Platform}

    def __str__(self) -> str:
        return f"{self.platform}:{self.url}"
