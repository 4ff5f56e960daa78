"""Tests for provider registry lookup and caching."""

from unittest.mock import MagicMock, patch

import pytest

from cinefetch.providers.google import GoogleProvider
from cinefetch.providers.registry import (
    _canonical_to_class_name,
    get_canonical_name,
    get_provider,
    list_all,
    list_available,
)


class TestGetProvider:
    @pytest.mark.parametrize("name", ["google", "gemini", "Gemini-Flash", " gemini-pro "])
    def test_by_name_or_alias(self, name):
        assert isinstance(get_provider(name), GoogleProvider)

    def test_cached(self):
        assert get_provider("google") is get_provider("gemini")

    def test_kwargs_not_cached(self):
        provider = get_provider("google", model="gemini-2.5-pro")
        assert provider._model == "gemini-2.5-pro"
        assert provider is not get_provider("google", model="gemini-2.5-pro")
        assert provider is not get_provider("google")

    @pytest.mark.parametrize("name", ["myspace", "openai", "claude"])
    def test_unknown(self, name):
        with pytest.raises(ValueError, match="Available providers: google"):
            get_provider(name)

    def test_bad_kwargs(self):
        with pytest.raises(TypeError, match="GoogleProvider"):
            get_provider("google", temperature=0.2)

    def test_import_failure(self):
        with patch("cinefetch.providers.registry.import_module", side_effect=ImportError("x")):
            with pytest.raises(ImportError, match="pip install google-generativeai"):
                get_provider("gemini")


class TestRegistryHelpers:
    def test_list_all(self):
        assert list_all() == ["google"]

    def test_canonical_name(self):
        assert get_canonical_name("Gemini-Flash") == "google"
        with pytest.raises(ValueError):
            get_canonical_name("myspace")

    def test_class_name(self):
        assert _canonical_to_class_name("google") == "GoogleProvider"
        assert _canonical_to_class_name("vertex-ai") == "VertexAiProvider"

    def test_list_available_without_key(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        assert list_available() == []

    def test_list_available_with_key(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "k")
        with patch.dict("sys.modules", {"google": MagicMock(), "google.generativeai": MagicMock()}):
            assert list_available() == ["google"]
