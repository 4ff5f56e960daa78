"""Tests for package metadata."""

from importlib import metadata

import pytest

import cinefetch


def test_version_is_initial_release():
    assert cinefetch.__version__ == "0.1.0"


def test_version_matches_distribution():
    try:
        installed = metadata.version("cinefetch")
    except metadata.PackageNotFoundError:
        pytest.skip("cinefetch is not installed")
    assert cinefetch.__version__ == installed
