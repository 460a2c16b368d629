"""Tests for the python -m yt_transcript command line."""

import json
import sys
from unittest.mock import MagicMock, patch

import pytest

from conftest import SAMPLE_TRANSCRIPT
from yt_transcript.__main__ import main, run_extract
from yt_transcript.extraction.errors import AllMethodsFailed
from yt_transcript.extraction.models import ExtractionResult, Failure


def _extractor_returning(result=None, error_reason=None) -> MagicMock:
    def extract(video_id, language=None, api_key=None, attempt_log=None):
        if error_reason:
            attempt_log.record("youtube-transcript-api", Failure(error_reason))
            raise AllMethodsFailed(attempt_log.entries)
        return result

    extractor = MagicMock()
    extractor.extract.side_effect = extract
    return extractor


RESULT = ExtractionResult(
    transcript=SAMPLE_TRANSCRIPT,
    segment_count=3,
    language="en",
    is_auto_generated=True,
    source_method="innertube-api",
    confidence_score=0.9,
)


class TestRunExtract:
    """Tests for the extract subcommand."""

    @staticmethod
    def test_success_prints_json(capsys: pytest.CaptureFixture) -> None:
        with patch(
            "yt_transcript.extraction.chain.build_primary_extractor",
            return_value=_extractor_returning(RESULT),
        ):
            code = run_extract("dQw4w9WgXcQ", "en", None, backup=False)

        payload = json.loads(capsys.readouterr().out)
        assert code == 0
        assert payload["source"] == "innertube-api"
        assert payload["transcript"] == SAMPLE_TRANSCRIPT

    @staticmethod
    def test_failure_exit_code(capsys: pytest.CaptureFixture) -> None:
        with patch(
            "yt_transcript.extraction.chain.build_backup_extractor",
            return_value=_extractor_returning(error_reason="No transcript found"),
        ):
            code = run_extract("dQw4w9WgXcQ", None, None, backup=True)

        captured = capsys.readouterr()
        assert code == 1
        assert json.loads(captured.out)["attempts"][0]["details"] == "No transcript found"
        assert "All extraction methods failed" in captured.err


class TestMain:
    """Tests for argument parsing."""

    @staticmethod
    def test_no_command_prints_help(monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "argv", ["yt_transcript"])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1

    @staticmethod
    def test_extract_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            sys, "argv", ["yt_transcript", "extract", "abc123", "--lang", "fr", "--api-key", "k", "--backup"]
        )
        with patch("yt_transcript.__main__.run_extract", return_value=0) as run:
            with pytest.raises(SystemExit) as exc_info:
                main()

        run.assert_called_once_with("abc123", "fr", "k", True)
        assert exc_info.value.code == 0
