"""Prometheus metrics middleware for FastAPI.

Records HTTP request metrics labelled by route template and exposes
a /metrics endpoint for Prometheus scraping.
"""

import time

from fastapi import FastAPI
from prometheus_client import Counter, Gauge, Histogram, make_asgi_app
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

UNMATCHED_PATH = "unmatched"

# =============================================================================
# HTTP METRICS
# =============================================================================

HTTP_REQUESTS_TOTAL = Counter(
    "yt_transcript_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

HTTP_REQUEST_DURATION = Histogram(
    "yt_transcript_http_request_duration_seconds",
    "HTTP request duration in seconds (extraction runs several upstream calls)",
    ["method", "path"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 40.0, 60.0],
)

HTTP_REQUESTS_IN_PROGRESS = Gauge(
    "yt_transcript_http_requests_in_progress",
    "HTTP requests currently being served",
    ["method"],
)


# =============================================================================
# MIDDLEWARE
# =============================================================================


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Records HTTP request metrics for Prometheus.

    Paths are labelled with the matched route template; requests that
    match no route share the ``unmatched`` label so scanners cannot
    grow the label set. The /metrics endpoint itself is not recorded.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Process request and record metrics.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware/handler in the chain.

        Returns:
            HTTP response from downstream handler.
        """
        if request.url.path.startswith("/metrics"):
            return await call_next(request)

        method = request.method
        start = time.perf_counter()
        status = "500"

        HTTP_REQUESTS_IN_PROGRESS.labels(method=method).inc()
        try:
            response = await call_next(request)
            status = str(response.status_code)
        finally:
            HTTP_REQUESTS_IN_PROGRESS.labels(method=method).dec()
            path = _route_path(request)
            HTTP_REQUESTS_TOTAL.labels(method=method, path=path, status=status).inc()
            HTTP_REQUEST_DURATION.labels(method=method, path=path).observe(time.perf_counter() - start)

        return response


def _route_path(request: Request) -> str:
    """Route template matched by the router, if any."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_PATH


# =============================================================================
# MOUNT HELPER
# =============================================================================


def mount_metrics(app: FastAPI) -> None:
    """Mount the /metrics Prometheus endpoint on a FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.mount("/metrics", make_asgi_app())
