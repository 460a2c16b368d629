"""Base transcript strategy.

Provides the attempt() contract shared by every extraction
strategy: subclasses implement _extract() and raise taxonomy errors,
attempt() turns any error into a Failure outcome so nothing is ever
thrown across the chain boundary.
"""

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Sequence

from yt_transcript.extraction.errors import ExtractionError, InsufficientContent
from yt_transcript.extraction.models import (
    CaptionTrack,
    ExtractionRequest,
    ExtractionResult,
    Failure,
    StrategyOutcome,
    Success,
    TranscriptSegment,
)
from yt_transcript.extraction.normalizer import build_transcript
from yt_transcript.extraction.tracks import language_codes
from yt_transcript.settings import settings
from yt_transcript.utils.logger import setup_logger


class TranscriptStrategy(ABC):
    """Abstract base class for all caption strategies.

    Attributes:
        name: Method identifier reported in results and attempt logs.
        confidence: Static confidence score of the method.
        timeout: Network timeout applied to the method's calls.
    """

    name: str = "base"

    def __init__(
        self,
        confidence: float,
        timeout: float,
        min_length: int | None = None,
    ) -> None:
        """Initialize strategy.

        Args:
            confidence: Static confidence score reported on success.
            timeout: Network timeout in seconds.
            min_length: Minimum transcript length (default from settings).
        """
        self.confidence = confidence
        self.timeout = timeout
        if min_length is None:
            min_length = settings.extraction.min_transcript_length
        self._min_length = min_length
        self._logger = setup_logger(f"yt.strategy.{self.name}")

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger

    # -------------------------------------------------------------------------
    # Contract
    # -------------------------------------------------------------------------

    def attempt(self, request: ExtractionRequest) -> StrategyOutcome:
        """Run the strategy once.

        Args:
            request: Extraction request.

        Returns:
            Success with a viable result, or Failure with a reason.
        """
        start = time.perf_counter()
        try:
            result = self._extract(request)
            self._check_viability(result)
        except ExtractionError as e:
            self._logger.warning(f"{self.name} failed for {request.video_id}: {e}")
            return Failure(reason=str(e), error_type=type(e).__name__)
        except Exception as e:
            self._logger.exception(f"{self.name} crashed for {request.video_id}")
            return Failure(reason=f"Unexpected error: {e}", error_type=type(e).__name__)

        elapsed = time.perf_counter() - start
        self._logger.info(
            f"{self.name} extracted {len(result.transcript)} chars "
            f"({result.language}) for {request.video_id} in {elapsed:.2f}s"
        )
        return Success(result=result)

    @abstractmethod
    def _extract(self, request: ExtractionRequest) -> ExtractionResult:
        """Fetch and normalize a transcript.

        Args:
            request: Extraction request.

        Returns:
            Extraction result (viability is checked by attempt()).

        Raises:
            ExtractionError: Any strategy-local failure.
        """
        pass

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _check_viability(self, result: ExtractionResult) -> None:
        """Reject transcripts under the minimum length."""
        length = len(result.transcript)
        if length < self._min_length:
            raise InsufficientContent(length)

    def _build_result(
        self,
        segments: Sequence[TranscriptSegment],
        track: CaptionTrack,
        tracks: Sequence[CaptionTrack] = (),
        video_title: str | None = None,
    ) -> ExtractionResult:
        """Assemble an ExtractionResult from normalized segments.

        Args:
            segments: Normalized, non-empty segments.
            track: Track the segments came from.
            tracks: Every track the strategy saw.
            video_title: Video title if known.

        Returns:
            Extraction result attributed to this strategy.
        """
        return ExtractionResult(
            transcript=build_transcript(segments),
            segment_count=len(segments),
            language=track.language_code,
            is_auto_generated=track.is_auto_generated,
            source_method=self.name,
            confidence_score=self.confidence,
            video_title=video_title,
            available_languages=language_codes(tracks),
        )
