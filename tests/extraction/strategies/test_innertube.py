"""Unit tests for the innertube player API strategy."""

import json
from typing import Any

import httpx
import pytest

from conftest import SAMPLE_TRANSCRIPT, make_player_response
from yt_transcript.extraction.models import ExtractionRequest, Failure, Success
from yt_transcript.extraction.strategies import InnertubeStrategy


def _handler(player: Any, caption_body: str, caption_status: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/youtubei/v1/player":
            return httpx.Response(200, json=player)
        if request.url.path == "/api/timedtext":
            return httpx.Response(caption_status, text=caption_body)
        return httpx.Response(404)

    return handler


@pytest.mark.unit
class TestInnertubeStrategy:
    """Tests for InnertubeStrategy."""

    @staticmethod
    def test_success(make_transport, player_response, json3_payload) -> None:
        transport = make_transport(_handler(player_response, json3_payload))
        outcome = InnertubeStrategy(transport=transport).attempt(ExtractionRequest("dQw4w9WgXcQ", "en"))

        assert isinstance(outcome, Success)
        result = outcome.result
        assert result.transcript == SAMPLE_TRANSCRIPT
        assert result.source_method == "innertube-api"
        assert result.confidence_score == pytest.approx(0.90)
        assert result.is_auto_generated is False
        assert result.video_title == "Test Video"
        assert result.available_languages == ["en", "fr"]

    @staticmethod
    def test_player_request(make_transport, player_response, json3_payload) -> None:
        transport = make_transport(_handler(player_response, json3_payload))
        InnertubeStrategy(transport=transport).attempt(ExtractionRequest("dQw4w9WgXcQ", "fr"))

        player_request = transport.requests[0]
        body = json.loads(player_request.content)
        assert player_request.method == "POST"
        assert player_request.url.params["key"]
        assert body["videoId"] == "dQw4w9WgXcQ"
        assert body["context"]["client"]["clientName"] == "WEB"
        assert body["context"]["client"]["hl"] == "fr"
        assert "CONSENT=YES+1" in player_request.headers["Cookie"]

    @staticmethod
    def test_downloads_selected_track(make_transport, player_response, json3_payload) -> None:
        transport = make_transport(_handler(player_response, json3_payload))
        InnertubeStrategy(transport=transport).attempt(ExtractionRequest("dQw4w9WgXcQ", "fr"))

        assert transport.requests[1].url.params["lang"] == "fr"

    @staticmethod
    def test_no_captions(make_transport, json3_payload) -> None:
        transport = make_transport(_handler(make_player_response(None), json3_payload))
        outcome = InnertubeStrategy(transport=transport).attempt(ExtractionRequest("dQw4w9WgXcQ"))

        assert isinstance(outcome, Failure)
        assert outcome.reason == "No caption tracks available"
        assert len(transport.requests) == 1

    @staticmethod
    def test_unexpected_player_shape(make_transport, json3_payload) -> None:
        player = make_player_response([{"languageCode": "en"}])
        transport = make_transport(_handler(player, json3_payload))
        outcome = InnertubeStrategy(transport=transport).attempt(ExtractionRequest("dQw4w9WgXcQ"))

        assert isinstance(outcome, Failure)
        assert outcome.error_type == "ParseFailure"

    @staticmethod
    def test_caption_download_error(make_transport, player_response) -> None:
        transport = make_transport(_handler(player_response, "", caption_status=429))
        outcome = InnertubeStrategy(transport=transport).attempt(ExtractionRequest("dQw4w9WgXcQ"))

        assert isinstance(outcome, Failure)
        assert outcome.error_type == "NetworkFailure"
        assert "429" in outcome.reason

    @staticmethod
    def test_empty_caption_body(make_transport, player_response) -> None:
        transport = make_transport(_handler(player_response, ""))
        outcome = InnertubeStrategy(transport=transport).attempt(ExtractionRequest("dQw4w9WgXcQ"))

        assert isinstance(outcome, Failure)
        assert outcome.reason == "Empty caption payload"

    @staticmethod
    def test_timeout(make_transport) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("slow", request=request)

        outcome = InnertubeStrategy(timeout=3, transport=make_transport(handler)).attempt(
            ExtractionRequest("dQw4w9WgXcQ")
        )

        assert isinstance(outcome, Failure)
        assert outcome.reason == "www.youtube.com timed out after 3s"
