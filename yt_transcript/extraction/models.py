"""Transcript extraction data models.

Plain dataclasses passed between strategies, the chain driver
and the HTTP layer. Nothing here is persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

# =============================================================================
# METHOD NAMES
# =============================================================================

METHOD_OFFICIAL_API = "youtube-data-api"
METHOD_INNERTUBE = "innertube-api"
METHOD_WATCH_PAGE = "watch-page"
METHOD_TRANSCRIPT_API = "youtube-transcript-api"


# =============================================================================
# REQUEST / TRACKS / SEGMENTS
# =============================================================================


@dataclass(frozen=True)
class ExtractionRequest:
    """Immutable input of one extraction call."""

    video_id: str
    language: str = "en"
    api_key: str | None = None


@dataclass(frozen=True)
class CaptionTrack:
    """One subtitle stream available for a video.

    Attributes:
        language_code: BCP-47 style code (e.g., 'en', 'en-US').
        display_name: Human-readable track name.
        is_auto_generated: True for speech-recognition (ASR) tracks.
        source_url: Where the caption payload can be downloaded.
    """

    language_code: str
    display_name: str = ""
    is_auto_generated: bool = False
    source_url: str = ""


@dataclass(frozen=True)
class TranscriptSegment:
    """One timed span of transcript text."""

    text: str
    start_seconds: float = 0.0
    duration_seconds: float = 0.0


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class ExtractionResult:
    """Normalized transcript returned by a successful strategy.

    Attributes:
        transcript: Segment texts joined by single spaces.
        segment_count: Number of retained segments.
        language: Language code of the track used.
        is_auto_generated: Whether the track was machine-generated.
        source_method: Name of the strategy that produced it.
        confidence_score: Static confidence of that strategy.
        video_title: Video title when the upstream exposes it.
        available_languages: Codes of every track the strategy saw.
    """

    transcript: str
    segment_count: int
    language: str
    is_auto_generated: bool
    source_method: str
    confidence_score: float
    video_title: str | None = None
    available_languages: list[str] = field(default_factory=list)


# =============================================================================
# OUTCOMES
# =============================================================================


@dataclass(frozen=True)
class Success:
    """A strategy produced a viable transcript."""

    result: ExtractionResult


@dataclass(frozen=True)
class Failure:
    """A strategy could not produce a viable transcript.

    Attributes:
        reason: Human-readable failure reason.
        error_type: Name of the taxonomy error behind it.
    """

    reason: str
    error_type: str = "ExtractionError"


StrategyOutcome = Success | Failure


# =============================================================================
# ATTEMPT LOG
# =============================================================================


@dataclass(frozen=True)
class AttemptLogEntry:
    """Record of one strategy attempt."""

    method: str
    succeeded: bool
    detail: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, str | bool]:
        """Serialize with the wire field names."""
        return {
            "method": self.method,
            "success": self.succeeded,
            "details": self.detail,
            "timestamp": self.timestamp.isoformat(),
        }


class AttemptLog:
    """Ordered attempt record of a single request."""

    def __init__(self) -> None:
        self._entries: list[AttemptLogEntry] = []

    def record(self, method: str, outcome: StrategyOutcome) -> AttemptLogEntry:
        """Append the outcome of one strategy.

        Args:
            method: Strategy method name.
            outcome: Outcome returned by the strategy.

        Returns:
            The appended entry.
        """
        if isinstance(outcome, Success):
            detail = f"{len(outcome.result.transcript)} chars extracted"
            entry = AttemptLogEntry(method=method, succeeded=True, detail=detail)
        else:
            entry = AttemptLogEntry(method=method, succeeded=False, detail=outcome.reason)
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> list[AttemptLogEntry]:
        """Copy of the recorded entries, in attempt order."""
        return list(self._entries)

    def to_list(self) -> list[dict[str, str | bool]]:
        """Serialize every entry for a response body."""
        return [entry.to_dict() for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)
