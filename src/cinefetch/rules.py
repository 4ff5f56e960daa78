"""
Platform detection rules for cinefetch.

An ordered table of video platforms, each with a regex recognizing that
platform's URL grammar inside free text. Order is the tie-break: when two
rules match the very same literal text, the earlier rule claims it.

Every variable-length run below is a single character class with an
explicit upper bound and no quantified group can match the same text two
ways, so each scan start costs bounded work and ``finditer`` over any input
stays linear in its length. The direct link rule, whose host has no fixed
literal, is additionally anchored to token boundaries.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from cinefetch.models.extracted_link import Platform

# Optional scheme and www/mobile subdomain shared by the hosted platforms
_PREFIX = r"(?:https?://)?(?:www\.|m\.)?"

# Extensions accepted as direct video file links
DIRECT_LINK_EXTENSIONS = ("mp4", "webm", "ogg", "mov", "m4v", "m3u8")

# Upper bound for URL path and query runs in the direct link rule
MAX_URL_BODY = 2048

# Characters that end a bare URL token. A direct link may only start at the
# beginning of the text or right after one of these, and its path never
# crosses one, so the path scans of different starts never overlap.
_URL_STOP = r"\s\"'<>()\[\]{}|\\^`=,;"

# Video platform patterns - ranked by precedence (lower rank wins ties)
# Named groups are informational; the whole match is the emitted URL.
VIDEO_PLATFORMS = [
    {
        "rank": 1,
        "name": Platform.YOUTUBE.value,
        "pattern": (
            _PREFIX
            + r"(?:youtube\.com/(?:watch\?(?:[^\s\"'<>#]{0,256}?&)?v=|embed/|v/|shorts/|live/)"
            r"|youtu\.be/)(?P<video_id>[a-z0-9_-]{11})"
        ),
    },
    {
        "rank": 2,
        "name": Platform.VIMEO.value,
        "pattern": _PREFIX + r"(?:player\.vimeo\.com/video/|vimeo\.com/)(?P<video_id>\d{1,20})",
    },
    {
        "rank": 3,
        "name": Platform.TWITCH.value,
        "pattern": _PREFIX + r"twitch\.tv/(?P<channel>[a-z0-9_]{1,64})",
    },
    {
        "rank": 4,
        "name": Platform.TIKTOK.value,
        "pattern": (
            _PREFIX
            + r"(?:tiktok\.com/@[\w.-]{1,64}/video/(?P<video_id>\d{1,32})"
            r"|(?:vm|vt)\.tiktok\.com/(?P<short_id>\w{1,32})"
            r"|tiktok\.com/t/(?P<short_code>\w{1,32}))"
        ),
    },
    {
        "rank": 5,
        "name": Platform.INSTAGRAM.value,
        "pattern": _PREFIX + r"instagram\.com/(?:p|reels|reel)/(?P<post_id>[\w-]{1,64})",
    },
    {
        "rank": 6,
        "name": Platform.DAILYMOTION.value,
        "pattern": (
            _PREFIX
            + r"(?:dailymotion\.com/(?:embed/)?video/|dai\.ly/)(?P<video_id>[a-z0-9]{1,32})"
        ),
    },
    {
        "rank": 7,
        "name": Platform.DIRECT_LINK.value,
        "pattern": (
            r"(?<![^%(stop)s])"
            r"(?:https?://[^%(stop)s/]{1,253}|(?:[a-z0-9-]{1,63}\.){1,8}[a-z]{2,24})"
            r"/[^%(stop)s]{0,%(body)d}?\.(?:%(ext)s)(?!\w)(?:\?[^\s\"'<>]{1,%(body)d})?"
            % {
                "stop": _URL_STOP,
                "body": MAX_URL_BODY,
                "ext": "|".join(DIRECT_LINK_EXTENSIONS),
            }
        ),
    },
]


@dataclass(frozen=True)
class PlatformRule:
    """A compiled platform detector."""

    name: str
    pattern: re.Pattern
    rank: int = 0

    def finditer(self, text: str):
        """Yield all non-overlapping matches of this rule in text."""
        return self.pattern.finditer(text)

    def matches(self, text: str) -> bool:
        """Check if this rule matches anywhere in text."""
        return self.pattern.search(text) is not None


def compile_rules(table: list[dict]) -> tuple[PlatformRule, ...]:
    """Compile a platform table into rules, sorted by rank.

    Args:
        table: List of dicts with "name", "pattern" and optional "rank" keys.

    Returns:
        Tuple of PlatformRule in precedence order.
    """
    ordered = sorted(enumerate(table), key=lambda item: (item[1].get("rank", item[0]), item[0]))
    return tuple(
        PlatformRule(
            name=entry["name"],
            pattern=re.compile(entry["pattern"], re.IGNORECASE),
            rank=entry.get("rank", index),
        )
        for index, entry in ordered
    )


DEFAULT_RULES: tuple[PlatformRule, ...] = compile_rules(VIDEO_PLATFORMS)


def get_rule(name: str) -> PlatformRule:
    """Look up a default rule by platform name (case-insensitive).

    Raises:
        KeyError: If no rule has that name.
    """
    wanted = name.lower()
    for rule in DEFAULT_RULES:
        if rule.name.lower() == wanted:
            return rule
    raise KeyError(name)


def detect_platform(url: str) -> str | None:
    """Return the platform of the first rule matching url, or None."""
    for rule in DEFAULT_RULES:
        if rule.matches(url):
            return rule.name
    return None


def list_supported_platforms() -> list[str]:
    """List platform names in precedence order."""
    return [rule.name for rule in DEFAULT_RULES]
