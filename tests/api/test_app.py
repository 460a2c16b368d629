"""Integration tests for the application factory and root endpoints."""

from collections.abc import Generator
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from yt_transcript.api.dependencies import get_primary_extractor
from yt_transcript.api.main import app, create_app


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """TestClient with an extractor double for the health check."""
    extractor = MagicMock()
    extractor.method_names = ["youtube-data-api", "innertube-api", "watch-page", "youtube-transcript-api"]
    app.dependency_overrides[get_primary_extractor] = lambda: extractor
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.mark.integration
class TestCreateApp:
    """Tests for create_app()."""

    @staticmethod
    def test_returns_fastapi() -> None:
        assert isinstance(create_app(), FastAPI)

    @staticmethod
    def test_routes_registered() -> None:
        paths = {route.path for route in app.routes}
        assert {"/api/transcript", "/api/transcript-backup", "/health", "/metrics"} <= paths


@pytest.mark.integration
class TestHealth:
    """Tests for GET /health."""

    @staticmethod
    def test_health(client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == "1.0.0"
        assert body["methods"][0] == "youtube-data-api"
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    @staticmethod
    def test_metrics_exposes_http_counter(client: TestClient) -> None:
        client.get("/health")
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "yt_transcript_http_requests_total" in response.text
