"""
Extraction coordinator - the single entry point for host surfaces.

A host surface (web page, desktop app, bot) hands raw text and a mode to
ExtractionCoordinator.run() and renders the returned ExtractionOutcome.
The coordinator:
1. Rejects empty input and overlapping runs without touching an extractor
2. Invokes exactly one extractor (deterministic rules or AI)
3. Classifies the result as success, empty (informational) or failure
4. Replaces its held result list as a whole when the run completes

run() never raises for extraction problems; every failure comes back as
an ExtractionOutcome with status FAILED.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from cinefetch.config.loader import get_config
from cinefetch.exceptions import (
    ExtractionBusyError,
    ExtractionServiceError,
    InputEmptyError,
)
from cinefetch.models.outcome import (
    ExtractionMode,
    ExtractionOutcome,
    ExtractionStatus,
)
from cinefetch.operations.ai_extraction import AIExtractionOrchestrator
from cinefetch.operations.deterministic import extract_links
from cinefetch.providers.registry import get_provider
from cinefetch.utils.logging import log_timed

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cinefetch.config.loader import CinefetchConfig
    from cinefetch.models.extracted_link import ExtractedLink
    from cinefetch.rules import PlatformRule

logger = logging.getLogger(__name__)

NO_MATCHES_MESSAGES: dict[ExtractionMode, str] = {
    ExtractionMode.DETERMINISTIC: "No video links found using standard scanning.",
    ExtractionMode.AI: "AI couldn't identify any video links in this content.",
}

FAILURE_PREFIX = "Failed to process content."


class ExtractionCoordinator:
    """Run one extraction at a time and hold the latest result list.

    Only one run may be in flight. A run requested while another is pending
    is rejected with status BUSY, so a late response can never overwrite a
    newer result. Results are replaced, never merged, when a run completes.

    Args:
        orchestrator: AI orchestrator to use for AI mode. If None, one is
            built on first AI run from the configured provider and model.
        config: Configuration. Defaults to get_config().
        smoothing_delay: Seconds to pause before deterministic results.
            Defaults to config.smoothing_delay.
        rules: Platform rules for deterministic mode. Defaults to the
            built-in rule set.

    Example:
        >>> coordinator = ExtractionCoordinator(smoothing_delay=0)
        >>> outcome = await coordinator.run(pasted_text, ExtractionMode.DETERMINISTIC)
        >>> outcome.status
        <ExtractionStatus.SUCCESS: 'success'>
    """

    def __init__(
        self,
        orchestrator: AIExtractionOrchestrator | None = None,
        *,
        config: CinefetchConfig | None = None,
        smoothing_delay: float | None = None,
        rules: Iterable[PlatformRule] | None = None,
    ):
        self._orchestrator = orchestrator
        self._config = config
        self._smoothing_delay = smoothing_delay
        self._rules = tuple(rules) if rules is not None else None
        self._busy = False
        self._results: list[ExtractedLink] = []
        self._last_outcome: ExtractionOutcome | None = None

    @property
    def busy(self) -> bool:
        """True while a run is in flight. Host surfaces should disable input."""
        return self._busy

    @property
    def results(self) -> list[ExtractedLink]:
        """Links from the most recent completed run."""
        return list(self._results)

    @property
    def last_outcome(self) -> ExtractionOutcome | None:
        return self._last_outcome

    @property
    def config(self) -> CinefetchConfig:
        if self._config is None:
            self._config = get_config()
        return self._config

    @property
    def smoothing_delay(self) -> float:
        if self._smoothing_delay is not None:
            return self._smoothing_delay
        return self.config.smoothing_delay

    def _get_orchestrator(self) -> AIExtractionOrchestrator:
        """Lazy-build the AI orchestrator from configuration."""
        if self._orchestrator is None:
            config = self.config
            reasoner = get_provider(config.ai_provider)
            self._orchestrator = AIExtractionOrchestrator(
                reasoner,
                model=config.ai_model,
                max_input_chars=config.ai_max_input_chars,
            )
            logger.debug(f"Using AI provider '{config.ai_provider}'")
        return self._orchestrator

    def _begin(self, input_text: str | None) -> None:
        """Check preconditions and claim the busy guard.

        Raises:
            ExtractionBusyError: If a run is already in flight.
            InputEmptyError: If input_text is empty or whitespace-only.
        """
        if self._busy:
            raise ExtractionBusyError()
        if not input_text or not input_text.strip():
            raise InputEmptyError()
        self._busy = True

    async def _extract(self, input_text: str, mode: ExtractionMode) -> list[ExtractedLink]:
        if mode is ExtractionMode.AI:
            try:
                orchestrator = self._get_orchestrator()
            except (ImportError, ValueError, TypeError) as e:
                raise ExtractionServiceError(
                    f"AI provider unavailable: {e}", provider=self.config.ai_provider
                ) from e
            return await orchestrator.extract(input_text)

        await asyncio.sleep(self.smoothing_delay)
        # CPU-bound scan runs in the default executor
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, extract_links, input_text, self._rules)

    async def _execute(self, input_text: str, mode: ExtractionMode) -> ExtractionOutcome:
        start = time.time()
        log_timed(f"Extracting links (mode={mode.value}, {len(input_text)} chars)")

        try:
            links = await self._extract(input_text, mode)
        except ExtractionServiceError as e:
            logger.warning(f"Extraction failed: {e.message}")
            return ExtractionOutcome(
                status=ExtractionStatus.FAILED,
                mode=mode,
                message=f"{FAILURE_PREFIX} {e.message}",
                error=e.message,
                elapsed_sec=time.time() - start,
            )
        except Exception as e:
            logger.exception("Unexpected error during extraction")
            return ExtractionOutcome(
                status=ExtractionStatus.FAILED,
                mode=mode,
                message=f"{FAILURE_PREFIX} {e}",
                error=str(e),
                elapsed_sec=time.time() - start,
            )

        log_timed(f"Found {len(links)} link(s)", start)
        if not links:
            return ExtractionOutcome(
                status=ExtractionStatus.EMPTY,
                mode=mode,
                message=NO_MATCHES_MESSAGES[mode],
                elapsed_sec=time.time() - start,
            )
        return ExtractionOutcome(
            status=ExtractionStatus.SUCCESS,
            mode=mode,
            links=links,
            elapsed_sec=time.time() - start,
        )

    async def run(
        self,
        input_text: str,
        mode: ExtractionMode | str = ExtractionMode.DETERMINISTIC,
    ) -> ExtractionOutcome:
        """Extract video links from input_text using the given mode.

        Args:
            input_text: Raw text from the host surface.
            mode: ExtractionMode or its value ("deterministic" / "ai", any case).

        Returns:
            ExtractionOutcome. Rejected calls (BUSY, INPUT_EMPTY) leave the
            held results untouched; every completed run, including a failed
            one, replaces them.

        Raises:
            ValueError: If mode is not a known extraction mode.
        """
        mode = ExtractionMode(mode)

        try:
            self._begin(input_text)
        except ExtractionBusyError as e:
            logger.warning("Rejected run: another extraction is in progress")
            return ExtractionOutcome(status=ExtractionStatus.BUSY, mode=mode, message=e.message)
        except InputEmptyError as e:
            logger.warning("Rejected run: no input text")
            return ExtractionOutcome(
                status=ExtractionStatus.INPUT_EMPTY, mode=mode, message=e.message
            )

        try:
            outcome = await self._execute(input_text, mode)
            self._results = list(outcome.links)
            self._last_outcome = outcome
        finally:
            self._busy = False
        return outcome

    def clear(self) -> None:
        """Drop the held results (no-op while a run is in flight)."""
        if self._busy:
            return
        self._results = []
        self._last_outcome = None
