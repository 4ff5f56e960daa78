"""Tests for platform detection rules."""

import re

import pytest

from cinefetch.rules import (
    DEFAULT_RULES,
    DIRECT_LINK_EXTENSIONS,
    PlatformRule,
    compile_rules,
    detect_platform,
    get_rule,
    list_supported_platforms,
)


class TestRuleTable:
    """Tests for the compiled default rule set."""

    def test_precedence_order(self):
        assert list_supported_platforms() == [
            "YouTube",
            "Vimeo",
            "Twitch",
            "TikTok",
            "Instagram",
            "DailyMotion",
            "DirectLink",
        ]

    def test_ranks_ascending(self):
        ranks = [rule.rank for rule in DEFAULT_RULES]
        assert ranks == sorted(ranks)

    def test_rules_case_insensitive(self):
        for rule in DEFAULT_RULES:
            assert rule.pattern.flags & re.IGNORECASE

    def test_get_rule(self):
        assert get_rule("youtube").name == "YouTube"
        assert get_rule("DirectLink").name == "DirectLink"

    def test_get_rule_unknown(self):
        with pytest.raises(KeyError):
            get_rule("myspace")

    def test_compile_rules_sorts_by_rank(self):
        rules = compile_rules(
            [
                {"name": "Second", "pattern": r"b", "rank": 2},
                {"name": "First", "pattern": r"a", "rank": 1},
            ]
        )
        assert [r.name for r in rules] == ["First", "Second"]
        assert all(isinstance(r, PlatformRule) for r in rules)

    def test_compile_rules_without_rank_keeps_table_order(self):
        rules = compile_rules([{"name": "A", "pattern": "a"}, {"name": "B", "pattern": "b"}])
        assert [r.name for r in rules] == ["A", "B"]


class TestDetectPlatform:
    """Tests for detect_platform() across the supported URL grammars."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
            "youtu.be/dQw4w9WgXcQ",
            "https://m.youtube.com/shorts/dQw4w9WgXcQ",
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
            "https://www.youtube.com/live/dQw4w9WgXcQ",
            "HTTPS://YOUTU.BE/dQw4w9WgXcQ",
        ],
    )
    def test_youtube(self, url):
        assert detect_platform(url) == "YouTube"

    @pytest.mark.parametrize(
        "url",
        ["https://vimeo.com/76979871", "https://player.vimeo.com/video/76979871"],
    )
    def test_vimeo(self, url):
        assert detect_platform(url) == "Vimeo"

    def test_twitch(self):
        assert detect_platform("https://www.twitch.tv/some_channel") == "Twitch"

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.tiktok.com/@scout2015/video/6718335390845095173",
            "https://vm.tiktok.com/ZMabc123/",
            "https://vt.tiktok.com/ZSxyz789/",
            "https://www.tiktok.com/t/ZTRabc12/",
        ],
    )
    def test_tiktok(self, url):
        assert detect_platform(url) == "TikTok"

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.instagram.com/p/CxYz_12-3/",
            "https://instagram.com/reel/CxYz123/",
            "https://instagram.com/reels/CxYz123/",
        ],
    )
    def test_instagram(self, url):
        assert detect_platform(url) == "Instagram"

    @pytest.mark.parametrize(
        "url",
        ["https://www.dailymotion.com/video/x8abc12", "https://dai.ly/x8abc12"],
    )
    def test_dailymotion(self, url):
        assert detect_platform(url) == "DailyMotion"

    @pytest.mark.parametrize("ext", DIRECT_LINK_EXTENSIONS)
    def test_direct_link_extensions(self, ext):
        assert detect_platform(f"https://cdn.example.com/media/clip.{ext}") == "DirectLink"

    def test_direct_link_without_scheme(self):
        assert detect_platform("cdn.example.com/clip.mp4") == "DirectLink"

    def test_not_a_video(self):
        assert detect_platform("https://example.com/about.html") is None
        assert detect_platform("just some words") is None

    def test_extension_must_end_the_path_segment(self):
        assert detect_platform("https://example.com/clip.mp4x") is None


class TestPlatformRule:
    """Tests for PlatformRule matching helpers."""

    def test_direct_link_keeps_query_string(self):
        rule = get_rule("DirectLink")
        match = next(rule.finditer("see https://cdn.example.com/v/clip.mp4?token=abc now"))
        assert match.group(0) == "https://cdn.example.com/v/clip.mp4?token=abc"

    def test_youtube_id_is_eleven_characters(self):
        rule = get_rule("YouTube")
        match = next(rule.finditer("https://youtu.be/dQw4w9WgXcQ"))
        assert match.group("video_id") == "dQw4w9WgXcQ"

    def test_youtube_watch_with_leading_params(self):
        rule = get_rule("YouTube")
        url = "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ"
        assert next(rule.finditer(url)).group(0) == url

    def test_matches(self):
        assert get_rule("Vimeo").matches("old link: vimeo.com/123")
        assert not get_rule("Vimeo").matches("vimeo.com/about")

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("src=https://cdn.example.com/a.mp4", "https://cdn.example.com/a.mp4"),
            ("(see cdn.example.com/b.webm)", "cdn.example.com/b.webm"),
            ('<a href="cdn.example.com/c.mov">', "cdn.example.com/c.mov"),
        ],
    )
    def test_direct_link_starts_at_token_boundary(self, text, expected):
        rule = get_rule("DirectLink")
        assert [m.group(0) for m in rule.finditer(text)] == [expected]

    def test_direct_link_never_starts_mid_token(self):
        rule = get_rule("DirectLink")
        assert list(rule.finditer("xx/ab.cd/e.mp4")) == []
        assert list(rule.finditer("foo_cdn.example.com/clip.mp4")) == []
