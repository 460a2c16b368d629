"""FastAPI application entry point.

Creates and configures the YouTube transcript REST API with
CORS headers, Prometheus metrics and OpenAPI documentation.
"""

from typing import Annotated

from fastapi import Depends, FastAPI

from yt_transcript.api.cors import CORSHeadersMiddleware
from yt_transcript.api.dependencies import get_primary_extractor
from yt_transcript.api.routers import transcript
from yt_transcript.api.schemas import HealthResponse
from yt_transcript.extraction.chain import FallbackExtractor
from yt_transcript.monitoring.middleware import PrometheusMiddleware, mount_metrics
from yt_transcript.settings import settings

# =============================================================================
# APPLICATION FACTORY
# =============================================================================


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance.
    """
    app = FastAPI(
        title=settings.api.title,
        version=settings.api.version,
        description="Multi-source YouTube transcript extraction with fallback",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    app.add_middleware(PrometheusMiddleware)
    # Added last so it wraps the metrics middleware too
    app.add_middleware(CORSHeadersMiddleware)
    mount_metrics(app)
    _register_routers(app)
    _register_health(app)
    return app


def _register_routers(app: FastAPI) -> None:
    """Register API routers.

    Args:
        app: FastAPI application instance.
    """
    app.include_router(transcript.router)


def _register_health(app: FastAPI) -> None:
    """Register the health check endpoint.

    Args:
        app: FastAPI application instance.
    """

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
        description="Verify API is running and list the configured extraction methods.",
    )
    def health_check(
        extractor: Annotated[FallbackExtractor, Depends(get_primary_extractor)],
    ) -> HealthResponse:
        """Health check endpoint.

        Returns:
            API status, version and primary chain methods.
        """
        return HealthResponse(
            status="healthy",
            version=settings.api.version,
            methods=extractor.method_names,
        )


app = create_app()


# =============================================================================
# CLI ENTRY POINT
# =============================================================================


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "yt_transcript.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
    )
