"""Tests for configuration resolution.

Verifies:
1. Defaults when no config exists
2. Priority: env > project > user > default, resolved per key
3. Invalid values are ignored rather than fatal
4. Caching and export directory creation
"""

from pathlib import Path

import pytest

from cinefetch.config.loader import (
    ConfigSource,
    _load_yaml_config,
    clear_config_cache,
    get_config,
    get_export_dir,
)


@pytest.fixture
def root_dir(tmp_path) -> Path:
    # Matches CINEFETCH_ROOT set by the autouse fixture in conftest
    root = tmp_path / "cinefetch-root"
    root.mkdir()
    return root


def write_yaml(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestDefaults:
    def test_no_config(self, tmp_path):
        config = get_config()

        root = (tmp_path / "cinefetch-root").resolve()
        assert config.root_dir == root
        assert config.export_dir == root / "exports"
        assert config.ai_provider == "google"
        assert config.ai_model is None
        assert config.ai_max_input_chars == 15_000
        assert config.smoothing_delay == 0.6
        assert config.source == ConfigSource.DEFAULT

    def test_repr_mentions_source(self):
        assert "source='default'" in repr(get_config())


class TestLayers:
    """Tests for per-key priority resolution."""

    def test_user_config(self, root_dir):
        write_yaml(root_dir / "config.yaml", "ai_provider: gemini-flash\nsmoothing_delay: 0\n")

        config = get_config()

        assert config.ai_provider == "gemini-flash"
        assert config.smoothing_delay == 0.0
        assert config.source == ConfigSource.USER

    def test_project_overrides_user(self, tmp_path, root_dir):
        write_yaml(root_dir / "config.yaml", "ai_provider: gemini-flash\nai_model: gemini-2.5-pro\n")
        write_yaml(tmp_path / ".cinefetch" / "config.yaml", "ai_provider: google\n")

        config = get_config()

        assert config.ai_provider == "google"
        # Keys the project config does not set still come from the user config
        assert config.ai_model == "gemini-2.5-pro"
        assert config.source == ConfigSource.PROJECT

    def test_project_config_found_from_subdirectory(self, tmp_path, monkeypatch):
        write_yaml(tmp_path / ".cinefetch" / "config.yaml", "ai_max_input_chars: 2000\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        assert get_config().ai_max_input_chars == 2000

    def test_env_overrides_files(self, tmp_path, root_dir, monkeypatch):
        write_yaml(root_dir / "config.yaml", "ai_provider: gemini-flash\n")
        write_yaml(tmp_path / ".cinefetch" / "config.yaml", "ai_provider: google\n")
        monkeypatch.setenv("CINEFETCH_AI_PROVIDER", "gemini")
        monkeypatch.setenv("CINEFETCH_AI_MAX_INPUT_CHARS", "500")

        config = get_config()

        assert config.ai_provider == "gemini"
        assert config.ai_max_input_chars == 500
        assert config.source == ConfigSource.ENV

    def test_relative_export_dir_resolves_against_config_file(self, tmp_path):
        config_path = write_yaml(tmp_path / ".cinefetch" / "config.yaml", "export_dir: out\n")

        config = get_config()

        assert config.export_dir == (config_path.parent / "out").resolve()


class TestInvalidValues:
    """Tests for values that are ignored with a warning."""

    def test_non_numeric_max_chars(self, monkeypatch):
        monkeypatch.setenv("CINEFETCH_AI_MAX_INPUT_CHARS", "lots")
        config = get_config()
        assert config.ai_max_input_chars == 15_000
        assert config.source == ConfigSource.DEFAULT

    def test_non_positive_max_chars(self, root_dir):
        write_yaml(root_dir / "config.yaml", "ai_max_input_chars: 0\n")
        assert get_config().ai_max_input_chars == 15_000

    def test_negative_delay(self, monkeypatch):
        monkeypatch.setenv("CINEFETCH_SMOOTHING_DELAY", "-1")
        assert get_config().smoothing_delay == 0.6

    def test_yaml_list_ignored(self, root_dir):
        path = write_yaml(root_dir / "config.yaml", "- not\n- a mapping\n")
        assert _load_yaml_config(path) is None
        assert get_config().source == ConfigSource.DEFAULT

    def test_broken_yaml_ignored(self, root_dir):
        path = write_yaml(root_dir / "config.yaml", "ai_provider: [unclosed\n")
        assert _load_yaml_config(path) is None
        assert get_config().ai_provider == "google"

    def test_empty_yaml(self, root_dir):
        path = write_yaml(root_dir / "config.yaml", "")
        assert _load_yaml_config(path) == {}

    def test_missing_file(self, tmp_path):
        assert _load_yaml_config(tmp_path / "nope.yaml") is None


class TestCaching:
    def test_cached(self):
        assert get_config() is get_config()

    def test_clear_cache(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("CINEFETCH_AI_MODEL", "gemini-2.5-pro")
        assert get_config() is first

        clear_config_cache()

        assert get_config().ai_model == "gemini-2.5-pro"

    def test_export_dir_created(self, tmp_path):
        export_dir = get_export_dir()
        assert export_dir.is_dir()
        assert export_dir == (tmp_path / "cinefetch-root").resolve() / "exports"

    def test_export_dir_not_created(self):
        export_dir = get_export_dir(ensure_exists=False)
        assert not export_dir.exists()
