"""Watch page scraping strategy.

Downloads the public watch page, pulls the embedded
ytInitialPlayerResponse object out of its scripts and reuses the
player parsing shared with the innertube strategy.
"""

import json
import re
from typing import Any

import httpx
from bs4 import BeautifulSoup

from yt_transcript.extraction.client import YouTubeHttpClient
from yt_transcript.extraction.errors import ParseFailure
from yt_transcript.extraction.models import METHOD_WATCH_PAGE, ExtractionRequest, ExtractionResult
from yt_transcript.extraction.normalizer import parse_caption_payload
from yt_transcript.extraction.player import extract_caption_tracks, parse_player_response
from yt_transcript.extraction.strategies.base import TranscriptStrategy
from yt_transcript.extraction.tracks import select_track
from yt_transcript.settings import settings

# Matches both `var ytInitialPlayerResponse = {` and
# `window["ytInitialPlayerResponse"] = {`.
_PLAYER_ASSIGNMENT = re.compile(r"ytInitialPlayerResponse\"?\]?\s*=\s*\{")

_CONSENT_HOSTS = ("consent.youtube.com", "consent.google.com")


class WatchPageStrategy(TranscriptStrategy):
    """Caption extraction by scraping the watch page HTML."""

    name = METHOD_WATCH_PAGE

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
            confidence=cfg.confidence_watch_page if confidence is None else confidence,
            timeout=cfg.timeout_watch_page if timeout is None else timeout,
            min_length=min_length,
        )
        self._transport = transport
        self._base_url = settings.youtube.base_url.rstrip("/")

    def _extract(self, request: ExtractionRequest) -> ExtractionResult:
        with YouTubeHttpClient(self.timeout, transport=self._transport) as http:
            response = http.get(
                f"{self._base_url}/watch",
                params={"v": request.video_id, "hl": request.language},
            )
            if response.url.host in _CONSENT_HOSTS:
                raise ParseFailure("Watch page redirected to the consent wall")

            player = parse_player_response(extract_player_json(response.text))
            tracks = extract_caption_tracks(player, self._base_url)
            track = select_track(tracks, request.language)
            self.logger.debug(f"Selected track {track.language_code} for {request.video_id}")

            segments = parse_caption_payload(http.get_text(track.source_url))

        return self._build_result(segments, track, tracks, video_title=player.title)


def extract_player_json(html: str) -> Any:
    """Find and decode the ytInitialPlayerResponse object of a watch page.

    Args:
        html: Watch page HTML.

    Returns:
        Decoded player JSON.

    Raises:
        ParseFailure: When no script assigns a decodable player object.
    """
    soup = BeautifulSoup(html, "html.parser")
    decoder = json.JSONDecoder()

    for script in soup.find_all("script"):
        source = script.string or ""
        match = _PLAYER_ASSIGNMENT.search(source)
        if not match:
            continue
        try:
            data, _ = decoder.raw_decode(source, match.end() - 1)
        except json.JSONDecodeError as e:
            raise ParseFailure(f"Malformed ytInitialPlayerResponse: {e.msg}") from e
        return data

    raise ParseFailure("No ytInitialPlayerResponse in watch page")
