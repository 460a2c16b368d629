"""Transcript extraction endpoints.

Two POST endpoints share one request contract:

- ``/api/transcript`` runs the full fallback chain.
- ``/api/transcript-backup`` runs the third-party library alone.

Both answer OPTIONS preflights with an empty 200 and reject every
other method with 405.
"""

import json
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from yt_transcript.api.dependencies import get_backup_extractor, get_primary_extractor
from yt_transcript.api.schemas import (
    AttemptSchema,
    MethodNotAllowedResponse,
    TranscriptData,
    TranscriptErrorResponse,
    TranscriptRequest,
    TranscriptSuccessResponse,
)
from yt_transcript.extraction.chain import FallbackExtractor
from yt_transcript.extraction.errors import AllMethodsFailed
from yt_transcript.extraction.models import AttemptLog
from yt_transcript.utils.logger import setup_logger

logger = setup_logger("api.routers.transcript")

router = APIRouter(prefix="/api", tags=["Transcript"])

MISSING_VIDEO_ID = "Missing required parameter: videoId"
METHOD_NOT_ALLOWED = "Method not allowed. Use POST."
METHOD_NOT_ALLOWED_HINT = "Send POST request with { videoId, lang? }"
REJECTED_METHODS = ["GET", "PUT", "PATCH", "DELETE"]


@dataclass(frozen=True)
class EndpointMessages:
    """Caller-facing texts of one endpoint."""

    success: str
    failure: str
    hint: str
    name_source: bool = False

    def success_message(self, source: str) -> str:
        """Success message, optionally naming the winning method."""
        return self.success.format(source=source) if self.name_source else self.success


PRIMARY_MESSAGES = EndpointMessages(
    success="Transcript extracted successfully using {source}",
    failure="Transcript extraction failed",
    hint="This video may not have captions available or they may be disabled.",
    name_source=True,
)

BACKUP_MESSAGES = EndpointMessages(
    success="Transcript extracted via backup service",
    failure="Backup transcript extraction failed",
    hint="This video may not have captions available.",
)


# =============================================================================
# HELPERS
# =============================================================================


async def _read_body(request: Request) -> dict[str, Any]:
    """Decode the JSON body, treating anything but an object as empty."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return body if isinstance(body, dict) else {}


def _error_response(status_code: int, body: TranscriptErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def _attempts(log: AttemptLog) -> list[AttemptSchema]:
    return [AttemptSchema.from_entry(entry) for entry in log.entries]


async def _run_extraction(
    request: Request,
    extractor: FallbackExtractor,
    messages: EndpointMessages,
) -> JSONResponse:
    """Validate the body, run the extractor and shape the response.

    Args:
        request: Incoming POST request.
        extractor: Fallback chain serving this endpoint.
        messages: Texts for this endpoint.

    Returns:
        200 with the transcript, 400 on a bad body, 500 when every
        method failed.
    """
    body = await _read_body(request)
    if not body.get("videoId"):
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            TranscriptErrorResponse(error=MISSING_VIDEO_ID, hint="Provide videoId in the request body"),
        )

    try:
        params = TranscriptRequest.model_validate(body)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            TranscriptErrorResponse(error=f"Invalid parameter {field}: {first['msg']}"),
        )

    log = AttemptLog()
    try:
        result = await run_in_threadpool(
            extractor.extract, params.video_id, params.lang, params.api_key, log
        )
    except Exception as e:
        if not isinstance(e, AllMethodsFailed):
            logger.exception(f"Extraction crashed for {params.video_id}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            TranscriptErrorResponse(
                error=str(e),
                message=messages.failure,
                hint=messages.hint,
                attempts=_attempts(log),
            ),
        )

    response = TranscriptSuccessResponse(
        data=TranscriptData.from_result(params.video_id, result),
        message=messages.success_message(result.source_method),
        attempts=_attempts(log),
    )
    return JSONResponse(content=response.model_dump(mode="json", by_alias=True, exclude_none=True))


# =============================================================================
# ENDPOINTS
# =============================================================================


@router.post(
    "/transcript",
    response_model=TranscriptSuccessResponse,
    responses={400: {"model": TranscriptErrorResponse}, 500: {"model": TranscriptErrorResponse}},
    summary="Extract transcript",
    description="Try every caption source in priority order and return the first transcript.",
)
async def extract_transcript(
    request: Request,
    extractor: Annotated[FallbackExtractor, Depends(get_primary_extractor)],
) -> JSONResponse:
    """Primary extraction endpoint.

    Args:
        request: Incoming request with ``{videoId, lang?, apiKey?}``.
        extractor: Full fallback chain.

    Returns:
        Transcript or aggregated failure.
    """
    return await _run_extraction(request, extractor, PRIMARY_MESSAGES)


@router.post(
    "/transcript-backup",
    response_model=TranscriptSuccessResponse,
    responses={400: {"model": TranscriptErrorResponse}, 500: {"model": TranscriptErrorResponse}},
    summary="Extract transcript (backup)",
    description="Extract a transcript with the youtube-transcript-api library only.",
)
async def extract_transcript_backup(
    request: Request,
    extractor: Annotated[FallbackExtractor, Depends(get_backup_extractor)],
) -> JSONResponse:
    """Backup extraction endpoint.

    Args:
        request: Incoming request with ``{videoId, lang?}``.
        extractor: Backup chain.

    Returns:
        Transcript or aggregated failure.
    """
    return await _run_extraction(request, extractor, BACKUP_MESSAGES)


@router.options("/transcript", include_in_schema=False)
@router.options("/transcript-backup", include_in_schema=False)
async def preflight() -> Response:
    """CORS preflight: empty 200 (headers come from the CORS middleware)."""
    return Response(status_code=status.HTTP_200_OK)


@router.api_route(
    "/transcript",
    methods=REJECTED_METHODS,
    include_in_schema=False,
    status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
)
@router.api_route(
    "/transcript-backup",
    methods=REJECTED_METHODS,
    include_in_schema=False,
    status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
)
async def method_not_allowed() -> JSONResponse:
    """Reject everything but POST and OPTIONS."""
    body = MethodNotAllowedResponse(error=METHOD_NOT_ALLOWED, hint=METHOD_NOT_ALLOWED_HINT)
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content=body.model_dump(),
    )
