"""Official YouTube Data API v3 strategy.

Lists caption tracks through the keyed Data API, downloads the
selected track from the public timedtext endpoint and looks up the
video title. Only runs when an API key is available.
"""

from typing import Any

import httpx

from yt_transcript.extraction.client import YouTubeHttpClient
from yt_transcript.extraction.errors import ExtractionError, ParseFailure
from yt_transcript.extraction.models import (
    METHOD_OFFICIAL_API,
    CaptionTrack,
    ExtractionRequest,
    ExtractionResult,
)
from yt_transcript.extraction.normalizer import parse_caption_payload
from yt_transcript.extraction.strategies.base import TranscriptStrategy
from yt_transcript.extraction.tracks import select_track
from yt_transcript.settings import settings


class OfficialApiStrategy(TranscriptStrategy):
    """Caption extraction through the YouTube Data API v3.

    The request's API key takes precedence over YOUTUBE_API_KEY.
    """

    name = METHOD_OFFICIAL_API

    def __init__(
        self,
        confidence: float | None = None,
        timeout: float | None = None,
        min_length: int | None = None,
        transport: httpx.BaseTransport | None = None,
        default_api_key: str | None = None,
    ) -> None:
        """Initialize strategy.

        Args:
            confidence: Confidence score (default from settings).
            timeout: Network timeout (default from settings).
            min_length: Minimum transcript length (default from settings).
            transport: Optional httpx transport.
            default_api_key: Key used when the request has none.
        """
        cfg = settings.extraction
        super().__init__(
            confidence=cfg.confidence_official_api if confidence is None else confidence,
            timeout=cfg.timeout_official_api if timeout is None else timeout,
            min_length=min_length,
        )
        self._transport = transport
        self._default_api_key = settings.youtube.api_key if default_api_key is None else default_api_key
        self._data_api_url = settings.youtube.data_api_url.rstrip("/")
        self._base_url = settings.youtube.base_url.rstrip("/")

    def _extract(self, request: ExtractionRequest) -> ExtractionResult:
        api_key = request.api_key or self._default_api_key
        if not api_key:
            raise ExtractionError("No API key supplied")

        with YouTubeHttpClient(self.timeout, transport=self._transport) as http:
            tracks = self._list_tracks(http, request.video_id, api_key)
            track = select_track(tracks, request.language)
            self.logger.debug(f"Selected track {track.language_code} for {request.video_id}")

            segments = parse_caption_payload(http.get_text(track.source_url))
            title = self._fetch_title(http, request.video_id, api_key)

        return self._build_result(segments, track, tracks, video_title=title)

    # -------------------------------------------------------------------------
    # Data API calls
    # -------------------------------------------------------------------------

    def _list_tracks(
        self,
        http: YouTubeHttpClient,
        video_id: str,
        api_key: str,
    ) -> list[CaptionTrack]:
        """List caption tracks via captions.list.

        Raises:
            ParseFailure: When items or snippets are malformed.
        """
        data = http.get_json(
            f"{self._data_api_url}/captions",
            params={"part": "snippet", "videoId": video_id, "key": api_key},
        )
        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise ParseFailure("captions.list response has no 'items' list")

        return [self._to_track(video_id, item) for item in items]

    def _to_track(self, video_id: str, item: Any) -> CaptionTrack:
        snippet = item.get("snippet") if isinstance(item, dict) else None
        if not isinstance(snippet, dict) or not snippet.get("language"):
            raise ParseFailure("captions.list item has no snippet.language")

        language = str(snippet["language"])
        is_asr = str(snippet.get("trackKind", "")).lower() == "asr"
        name = str(snippet.get("name") or "")
        return CaptionTrack(
            language_code=language,
            display_name=name or language,
            is_auto_generated=is_asr,
            source_url=self._timedtext_url(video_id, language, is_asr, name),
        )

    def _timedtext_url(self, video_id: str, language: str, is_asr: bool, name: str) -> str:
        """Build the public timedtext URL of a track."""
        params = {"v": video_id, "lang": language, "fmt": "json3"}
        if is_asr:
            params["kind"] = "asr"
        if name:
            params["name"] = name
        return str(httpx.URL(f"{self._base_url}/api/timedtext", params=params))

    def _fetch_title(self, http: YouTubeHttpClient, video_id: str, api_key: str) -> str | None:
        """Look up the video title; a failed lookup leaves it unknown."""
        try:
            data = http.get_json(
                f"{self._data_api_url}/videos",
                params={"part": "snippet", "id": video_id, "key": api_key},
            )
        except ExtractionError as e:
            self.logger.warning(f"Title lookup failed for {video_id}: {e}")
            return None

        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list) or not items or not isinstance(items[0], dict):
            return None
        snippet = items[0].get("snippet")
        title = snippet.get("title") if isinstance(snippet, dict) else None
        return title if isinstance(title, str) and title else None
