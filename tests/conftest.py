"""Pytest configuration for cinefetch tests."""

import pytest

from cinefetch.config.loader import clear_config_cache
from cinefetch.providers.registry import clear_cache


def pytest_addoption(parser):
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests against real provider APIs (requires API keys)",
    )


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--run-integration"):
        skip = pytest.mark.skip(reason="needs --run-integration flag")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip)


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path, monkeypatch):
    """Keep tests away from real user config and cached providers."""
    monkeypatch.setenv("CINEFETCH_ROOT", str(tmp_path / "cinefetch-root"))
    for var in (
        "CINEFETCH_EXPORT_DIR",
        "CINEFETCH_AI_PROVIDER",
        "CINEFETCH_AI_MODEL",
        "CINEFETCH_AI_MAX_INPUT_CHARS",
        "CINEFETCH_SMOOTHING_DELAY",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_config_cache()
    clear_cache()
    yield
    clear_config_cache()
    clear_cache()
