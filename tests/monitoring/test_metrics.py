"""Tests for Prometheus metrics definitions."""

from unittest.mock import MagicMock

import pytest
from prometheus_client import REGISTRY, Counter, Histogram

from yt_transcript.extraction.chain import FallbackExtractor
from yt_transcript.extraction.errors import AllMethodsFailed
from yt_transcript.extraction.models import Failure
from yt_transcript.monitoring.metrics import EXTRACTIONS_TOTAL, STRATEGY_ATTEMPTS_TOTAL, STRATEGY_DURATION


class TestMetricTypes:
    """Tests for metric objects."""

    @staticmethod
    def test_strategy_attempts_is_counter() -> None:
        assert isinstance(STRATEGY_ATTEMPTS_TOTAL, Counter)

    @staticmethod
    def test_strategy_duration_is_histogram() -> None:
        assert isinstance(STRATEGY_DURATION, Histogram)

    @staticmethod
    def test_extractions_is_counter() -> None:
        assert isinstance(EXTRACTIONS_TOTAL, Counter)


class TestChainRecordsMetrics:
    """Tests for metric updates by the chain."""

    @staticmethod
    def test_failed_attempt_counted() -> None:
        labels = {"method": "metrics-probe", "outcome": "failure"}
        before = REGISTRY.get_sample_value("yt_transcript_strategy_attempts_total", labels) or 0.0

        strategy = MagicMock()
        strategy.name = "metrics-probe"
        strategy.attempt.return_value = Failure("No caption tracks available")
        with pytest.raises(AllMethodsFailed):
            FallbackExtractor([strategy]).extract("vid")

        after = REGISTRY.get_sample_value("yt_transcript_strategy_attempts_total", labels)
        assert after == before + 1
