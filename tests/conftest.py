"""Shared pytest fixtures for transcript extraction tests."""

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

# Long enough to pass the default 50-character minimum.
SAMPLE_LINES = [
    "Never gonna give you up,",
    "never gonna let you down,",
    "never gonna run around and desert you.",
]
SAMPLE_TRANSCRIPT = " ".join(SAMPLE_LINES)


@pytest.fixture(autouse=True, scope="function")
def mock_env_for_tests(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock env variables for reproducible settings objects."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("LOG_TO_FILE", "false")
    monkeypatch.delenv("YOUTUBE_API_KEY", raising=False)
    monkeypatch.delenv("YOUTUBE_COOKIES", raising=False)


# =============================================================================
# CAPTION PAYLOADS
# =============================================================================


def make_json3(lines: list[str]) -> str:
    """Build a json3 caption payload, one event per line."""
    events = [
        {"tStartMs": i * 2000, "dDurationMs": 2000, "segs": [{"utf8": line}]}
        for i, line in enumerate(lines)
    ]
    return json.dumps({"wireMagic": "pb3", "events": events})


@pytest.fixture
def json3_payload() -> str:
    """json3 payload of the sample transcript."""
    return make_json3(SAMPLE_LINES)


# =============================================================================
# PLAYER RESPONSES
# =============================================================================


def make_player_response(
    tracks: list[dict[str, Any]] | None = None,
    status: str = "OK",
    title: str = "Test Video",
) -> dict[str, Any]:
    """Build a minimal player response."""
    data: dict[str, Any] = {
        "playabilityStatus": {"status": status},
        "videoDetails": {"videoId": "dQw4w9WgXcQ", "title": title},
    }
    if tracks is not None:
        data["captions"] = {"playerCaptionsTracklistRenderer": {"captionTracks": tracks}}
    return data


def make_track_entry(language: str, asr: bool = False, base_url: str | None = None) -> dict[str, Any]:
    """Build one captionTracks entry."""
    entry: dict[str, Any] = {
        "baseUrl": base_url or f"https://www.youtube.com/api/timedtext?v=dQw4w9WgXcQ&lang={language}",
        "languageCode": language,
        "name": {"simpleText": language.upper()},
        "vssId": f"a.{language}" if asr else f".{language}",
    }
    if asr:
        entry["kind"] = "asr"
    return entry


@pytest.fixture
def player_response() -> dict[str, Any]:
    """Player response with an English ASR, an English and a French track."""
    return make_player_response(
        [make_track_entry("en", asr=True), make_track_entry("en"), make_track_entry("fr")]
    )


# =============================================================================
# HTTP TRANSPORT
# =============================================================================


class RecordingTransport(httpx.MockTransport):
    """MockTransport keeping every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Factory for recording mock transports."""
    return RecordingTransport


# =============================================================================
# YOUTUBE-TRANSCRIPT-API DOUBLES
# =============================================================================


def make_snippet(text: str, start: float = 0.0, duration: float = 1.0) -> MagicMock:
    """Library snippet double."""
    snippet = MagicMock()
    snippet.text = text
    snippet.start = start
    snippet.duration = duration
    return snippet


def make_library_transcript(
    language_code: str,
    is_generated: bool = False,
    lines: list[str] | None = None,
) -> MagicMock:
    """Library transcript double whose fetch() yields snippets."""
    transcript = MagicMock()
    transcript.language_code = language_code
    transcript.language = language_code.upper()
    transcript.is_generated = is_generated
    transcript.fetch.return_value = [
        make_snippet(line, start=i * 2.0, duration=2.0) for i, line in enumerate(lines or SAMPLE_LINES)
    ]
    return transcript


@pytest.fixture
def mock_transcript_api() -> MagicMock:
    """YouTubeTranscriptApi double listing one English transcript."""
    api = MagicMock()
    api.list.return_value = [make_library_transcript("en")]
    return api
