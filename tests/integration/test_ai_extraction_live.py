"""Integration tests for AI extraction against real provider APIs.

These tests make actual API calls. They require API keys to be set as
environment variables and the corresponding SDKs to be installed.

Run with: pytest tests/integration --run-integration
"""

from __future__ import annotations

import os

import pytest

from cinefetch.models import ExtractionMode, ExtractionStatus
from cinefetch.operations import AIExtractionOrchestrator, ExtractionCoordinator
from cinefetch.providers import get_provider

pytestmark = pytest.mark.integration

OBFUSCATED_TEXT = """
Thanks for coming to the meetup! The recording is up at
youtu dot be slash dQw4w9WgXcQ and the slides are on the wiki.
"""


def _skip_without_key(env_var: str) -> None:
    if not os.environ.get(env_var):
        pytest.skip(f"{env_var} not set")


@pytest.mark.asyncio
async def test_recovers_obfuscated_link():
    _skip_without_key("GOOGLE_API_KEY")
    orchestrator = AIExtractionOrchestrator(get_provider("google"))

    links = await orchestrator.extract(OBFUSCATED_TEXT)

    assert any("dQw4w9WgXcQ" in link.url for link in links)


@pytest.mark.asyncio
async def test_coordinator_ai_mode_end_to_end():
    _skip_without_key("GOOGLE_API_KEY")
    coordinator = ExtractionCoordinator(smoothing_delay=0)

    outcome = await coordinator.run(OBFUSCATED_TEXT, ExtractionMode.AI)

    assert outcome.status in (ExtractionStatus.SUCCESS, ExtractionStatus.EMPTY)
