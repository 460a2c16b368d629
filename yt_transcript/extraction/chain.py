"""Fallback extraction chain.

Runs caption strategies in priority order and returns the first
viable transcript. Later strategies are never started once one
succeeds. Every attempt is recorded in the request's attempt log.
"""

import time
from collections.abc import Sequence

from youtube_transcript_api import YouTubeTranscriptApi

from yt_transcript.extraction.errors import AllMethodsFailed
from yt_transcript.extraction.models import (
    AttemptLog,
    ExtractionRequest,
    ExtractionResult,
    Success,
)
from yt_transcript.extraction.strategies import (
    InnertubeStrategy,
    OfficialApiStrategy,
    TranscriptApiStrategy,
    TranscriptStrategy,
    WatchPageStrategy,
)
from yt_transcript.monitoring.metrics import (
    EXTRACTIONS_TOTAL,
    STRATEGY_ATTEMPTS_TOTAL,
    STRATEGY_DURATION,
)
from yt_transcript.settings import settings
from yt_transcript.utils.logger import setup_logger

logger = setup_logger("yt.chain")


class FallbackExtractor:
    """Ordered fallback over transcript strategies.

    Attributes:
        strategies: Strategies in priority order.
    """

    def __init__(self, strategies: Sequence[TranscriptStrategy]) -> None:
        """Initialize extractor.

        Args:
            strategies: Strategies, highest priority first.

        Raises:
            ValueError: When no strategy is given.
        """
        if not strategies:
            raise ValueError("FallbackExtractor needs at least one strategy")
        self.strategies = list(strategies)

    @property
    def method_names(self) -> list[str]:
        """Names of the configured strategies, in order."""
        return [strategy.name for strategy in self.strategies]

    def extract(
        self,
        video_id: str,
        language: str | None = None,
        api_key: str | None = None,
        attempt_log: AttemptLog | None = None,
    ) -> ExtractionResult:
        """Extract a transcript with the first strategy that succeeds.

        Args:
            video_id: YouTube video ID.
            language: Preferred language (default from settings).
            api_key: Optional Data API key for this request.
            attempt_log: Log to record attempts into (a fresh one if omitted).

        Returns:
            Result of the first successful strategy.

        Raises:
            AllMethodsFailed: When every strategy failed.
        """
        request = ExtractionRequest(
            video_id=video_id,
            language=language or settings.extraction.default_language,
            api_key=api_key or None,
        )
        log = attempt_log if attempt_log is not None else AttemptLog()

        logger.info(
            f"Starting extraction for {video_id} ({request.language}) "
            f"with {len(self.strategies)} methods"
        )

        for strategy in self.strategies:
            start = time.perf_counter()
            outcome = strategy.attempt(request)
            STRATEGY_DURATION.labels(method=strategy.name).observe(time.perf_counter() - start)

            entry = log.record(strategy.name, outcome)
            STRATEGY_ATTEMPTS_TOTAL.labels(
                method=strategy.name,
                outcome="success" if entry.succeeded else "failure",
            ).inc()

            if isinstance(outcome, Success):
                EXTRACTIONS_TOTAL.labels(outcome="success", method=strategy.name).inc()
                logger.info(f"Success using {strategy.name}: {entry.detail}")
                return outcome.result

            logger.info(f"{strategy.name} failed: {entry.detail}")

        EXTRACTIONS_TOTAL.labels(outcome="failure", method="none").inc()
        error = AllMethodsFailed(log.entries)
        logger.warning(f"{video_id}: {error}")
        raise error


# =============================================================================
# FACTORIES
# =============================================================================


def build_primary_extractor(transcript_api: YouTubeTranscriptApi | None = None) -> FallbackExtractor:
    """Full chain: official API, innertube, watch page, third-party library.

    Args:
        transcript_api: Library client shared by the adapter strategy.

    Returns:
        Configured extractor.
    """
    return FallbackExtractor(
        [
            OfficialApiStrategy(),
            InnertubeStrategy(),
            WatchPageStrategy(),
            TranscriptApiStrategy(api=transcript_api),
        ]
    )


def build_backup_extractor(transcript_api: YouTubeTranscriptApi | None = None) -> FallbackExtractor:
    """Backup chain: the third-party library alone.

    Args:
        transcript_api: Library client shared by the adapter strategy.

    Returns:
        Configured extractor.
    """
    return FallbackExtractor([TranscriptApiStrategy(api=transcript_api)])
