"""Internal player API (innertube) strategy.

Calls youtubei/v1/player as the web client would, with consent
and operator-supplied cookies, then downloads the selected caption
track.
"""

import httpx

from yt_transcript.extraction.client import YouTubeHttpClient
from yt_transcript.extraction.models import METHOD_INNERTUBE, ExtractionRequest, ExtractionResult
from yt_transcript.extraction.normalizer import parse_caption_payload
from yt_transcript.extraction.player import extract_caption_tracks, parse_player_response
from yt_transcript.extraction.strategies.base import TranscriptStrategy
from yt_transcript.extraction.tracks import select_track
from yt_transcript.settings import settings


class InnertubeStrategy(TranscriptStrategy):
    """Caption extraction through the cookie-augmented player API."""

    name = METHOD_INNERTUBE

    def __init__(
        self,
        confidence: float | None = None,
        timeout: float | None = None,
        min_length: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize strategy.

        Args:
            confidence: Confidence score (default from settings).
            timeout: Network timeout (default from settings).
            min_length: Minimum transcript length (default from settings).
            transport: Optional httpx transport.
        """
        cfg = settings.extraction
        super().__init__(
            confidence=cfg.confidence_innertube if confidence is None else confidence,
            timeout=cfg.timeout_innertube if timeout is None else timeout,
            min_length=min_length,
        )
        self._transport = transport
        self._cfg = settings.youtube
        self._base_url = self._cfg.base_url.rstrip("/")

    def _extract(self, request: ExtractionRequest) -> ExtractionResult:
        with YouTubeHttpClient(self.timeout, transport=self._transport) as http:
            data = http.post_json(
                f"{self._base_url}/youtubei/v1/player",
                payload=self._build_payload(request),
                params={"key": self._cfg.innertube_key},
                headers={
                    "Content-Type": "application/json",
                    "Origin": self._base_url,
                    "Referer": f"{self._base_url}/watch?v={request.video_id}",
                },
            )
            player = parse_player_response(data)
            tracks = extract_caption_tracks(player, self._base_url)
            track = select_track(tracks, request.language)
            self.logger.debug(f"Selected track {track.language_code} for {request.video_id}")

            segments = parse_caption_payload(http.get_text(track.source_url))

        return self._build_result(segments, track, tracks, video_title=player.title)

    def _build_payload(self, request: ExtractionRequest) -> dict:
        """Player request body for the configured web client."""
        return {
            "videoId": request.video_id,
            "context": {
                "client": {
                    "clientName": self._cfg.innertube_client_name,
                    "clientVersion": self._cfg.innertube_client_version,
                    "hl": request.language,
                    "gl": "US",
                }
            },
        }
