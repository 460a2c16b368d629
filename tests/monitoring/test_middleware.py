"""Tests for Prometheus metrics middleware."""

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY, Counter, Gauge, Histogram

from yt_transcript.api.cors import CORSHeadersMiddleware
from yt_transcript.monitoring.middleware import (
    HTTP_REQUEST_DURATION,
    HTTP_REQUESTS_IN_PROGRESS,
    HTTP_REQUESTS_TOTAL,
    PrometheusMiddleware,
    mount_metrics,
)


@pytest.fixture
def app():
    """Create a minimal FastAPI app with the service middlewares."""
    test_app = FastAPI()
    test_app.add_middleware(PrometheusMiddleware)
    test_app.add_middleware(CORSHeadersMiddleware)
    mount_metrics(test_app)

    @test_app.get("/ping")
    def ping():
        return {"status": "ok"}

    @test_app.get("/fail")
    def fail():
        raise HTTPException(status_code=500, detail="test error")

    return test_app


@pytest.fixture
def client(app):
    """TestClient for the middleware test app."""
    return TestClient(app)


class TestMetricsEndpoint:
    """Tests for the /metrics Prometheus endpoint."""

    @staticmethod
    def test_metrics_returns_200(client) -> None:
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]

    @staticmethod
    def test_metrics_contains_http_series(client) -> None:
        client.get("/ping")
        body = client.get("/metrics").text
        assert "yt_transcript_http_requests_total" in body
        assert "yt_transcript_http_request_duration_seconds" in body


class TestPrometheusMiddleware:
    """Tests for HTTP request metrics recording."""

    @staticmethod
    def test_successful_request_recorded(client) -> None:
        client.get("/ping")
        body = client.get("/metrics").text
        assert 'path="/ping"' in body
        assert 'status="200"' in body

    @staticmethod
    def test_error_request_recorded(client) -> None:
        client.get("/fail")
        body = client.get("/metrics").text
        assert 'path="/fail"' in body
        assert 'status="500"' in body

    @staticmethod
    def test_unknown_paths_share_one_label(client) -> None:
        client.get("/wp-login.php")
        client.get("/.env")
        body = client.get("/metrics").text
        assert 'path="unmatched"' in body
        assert "wp-login" not in body

    @staticmethod
    def test_in_progress_back_to_zero(client) -> None:
        client.get("/ping")
        assert REGISTRY.get_sample_value("yt_transcript_http_requests_in_progress", {"method": "GET"}) == 0

    @staticmethod
    def test_metrics_path_not_recorded(client) -> None:
        client.get("/metrics")
        body = client.get("/metrics").text
        assert 'path="/metrics' not in body

    @staticmethod
    def test_metric_types() -> None:
        assert isinstance(HTTP_REQUESTS_TOTAL, Counter)
        assert isinstance(HTTP_REQUEST_DURATION, Histogram)
        assert isinstance(HTTP_REQUESTS_IN_PROGRESS, Gauge)


class TestCORSHeadersMiddleware:
    """Tests for CORSHeadersMiddleware."""

    @staticmethod
    def test_headers_without_origin(client) -> None:
        response = client.get("/ping")
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert response.headers["Access-Control-Allow-Methods"] == "POST, OPTIONS"
        assert response.headers["Access-Control-Allow-Headers"] == "Content-Type, Authorization"

    @staticmethod
    def test_headers_on_errors(client) -> None:
        response = client.get("/fail")
        assert response.status_code == 500
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    @staticmethod
    def test_headers_on_not_found(client) -> None:
        assert client.get("/missing").headers["Access-Control-Allow-Origin"] == "*"
