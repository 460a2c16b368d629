"""youtube-transcript-api adapter strategy.

Wraps the third-party library as a last-resort strategy. The
library client is constructed once by the caller and injected, so
tests substitute a mock without touching module state.
"""

from typing import Any

import requests
from youtube_transcript_api import NoTranscriptFound, TranscriptsDisabled, YouTubeTranscriptApi
from youtube_transcript_api._errors import CouldNotRetrieveTranscript, VideoUnavailable

from yt_transcript.extraction.errors import NetworkFailure, NoCaptionsAvailable, ParseFailure
from yt_transcript.extraction.models import (
    METHOD_TRANSCRIPT_API,
    CaptionTrack,
    ExtractionRequest,
    ExtractionResult,
)
from yt_transcript.extraction.normalizer import collapse_whitespace, make_segments
from yt_transcript.extraction.strategies.base import TranscriptStrategy
from yt_transcript.extraction.tracks import select_track
from yt_transcript.settings import settings


class TimeoutSession(requests.Session):
    """requests.Session applying a default timeout to every request."""

    def __init__(self, timeout: float) -> None:
        super().__init__()
        self.timeout = timeout

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        kwargs.setdefault("timeout", self.timeout)
        return super().request(method, url, **kwargs)


def build_transcript_api(timeout: float | None = None) -> YouTubeTranscriptApi:
    """Construct the library client with a timeout-bound session.

    Args:
        timeout: Per-request timeout (default from settings).

    Returns:
        Ready-to-use YouTubeTranscriptApi instance.
    """
    if timeout is None:
        timeout = settings.extraction.timeout_transcript_api
    session = TimeoutSession(timeout)
    session.headers.update({"User-Agent": settings.youtube.user_agent})
    return YouTubeTranscriptApi(http_client=session)


class TranscriptApiStrategy(TranscriptStrategy):
    """Caption extraction through the youtube-transcript-api library."""

    name = METHOD_TRANSCRIPT_API

    def __init__(
        self,
        api: YouTubeTranscriptApi | None = None,
        confidence: float | None = None,
        timeout: float | None = None,
        min_length: int | None = None,
    ) -> None:
        """Initialize strategy.

        Args:
            api: Library client (built once here when omitted).
            confidence: Confidence score (default from settings).
            timeout: Network timeout (default from settings).
            min_length: Minimum transcript length (default from settings).
        """
        cfg = settings.extraction
        super().__init__(
            confidence=cfg.confidence_transcript_api if confidence is None else confidence,
            timeout=cfg.timeout_transcript_api if timeout is None else timeout,
            min_length=min_length,
        )
        self._api = api if api is not None else build_transcript_api(self.timeout)

    def _extract(self, request: ExtractionRequest) -> ExtractionResult:
        try:
            listed = [
                (self._to_track(transcript), transcript) for transcript in self._api.list(request.video_id)
            ]
            tracks = [track for track, _ in listed]
            track = select_track(tracks, request.language)
            chosen = next(transcript for candidate, transcript in listed if candidate is track)
            snippets = list(chosen.fetch())
        except TranscriptsDisabled as e:
            raise NoCaptionsAvailable("Transcripts are disabled for this video") from e
        except NoTranscriptFound as e:
            raise NoCaptionsAvailable("No transcript found") from e
        except VideoUnavailable as e:
            raise NoCaptionsAvailable("Video is unavailable") from e
        except CouldNotRetrieveTranscript as e:
            raise ParseFailure(f"Could not retrieve transcript: {type(e).__name__}") from e
        except requests.Timeout as e:
            raise NetworkFailure(f"youtube-transcript-api timed out after {self.timeout:g}s") from e
        except requests.RequestException as e:
            raise NetworkFailure(f"youtube-transcript-api unreachable: {type(e).__name__}") from e

        # The library unescapes snippet text and drops formatting tags.
        segments = make_segments(
            ((snippet.text, float(snippet.start), float(snippet.duration)) for snippet in snippets),
            clean=collapse_whitespace,
        )
        return self._build_result(segments, track, tracks)

    @staticmethod
    def _to_track(transcript: Any) -> CaptionTrack:
        return CaptionTrack(
            language_code=transcript.language_code,
            display_name=getattr(transcript, "language", transcript.language_code),
            is_auto_generated=bool(transcript.is_generated),
        )
