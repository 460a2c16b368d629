"""Pydantic schemas for API request/response validation.

Field names on the wire are camelCase; Python attributes are
snake_case and responses are dumped by alias.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from yt_transcript.extraction.models import AttemptLogEntry, ExtractionResult
from yt_transcript.settings import settings


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


# =============================================================================
# HEALTH
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(examples=["healthy"])
    version: str = Field(examples=["1.0.0"])
    methods: list[str] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# =============================================================================
# TRANSCRIPT REQUEST
# =============================================================================


class TranscriptRequest(_CamelModel):
    """Transcript extraction request body."""

    video_id: str = Field(alias="videoId", min_length=1, max_length=64)
    lang: str = Field(
        default_factory=lambda: settings.extraction.default_language,
        min_length=1,
        max_length=16,
    )
    api_key: str | None = Field(default=None, alias="apiKey")


# =============================================================================
# TRANSCRIPT RESPONSES
# =============================================================================


class AttemptSchema(_CamelModel):
    """One strategy attempt as reported to callers."""

    method: str
    success: bool
    details: str
    timestamp: datetime

    @classmethod
    def from_entry(cls, entry: AttemptLogEntry) -> "AttemptSchema":
        """Build from an attempt log entry."""
        return cls(
            method=entry.method,
            success=entry.succeeded,
            details=entry.detail,
            timestamp=entry.timestamp,
        )


class TranscriptData(_CamelModel):
    """Transcript payload of a successful extraction."""

    transcript: str
    language: str
    confidence: float | None = None
    source: str
    segments: int
    video_id: str = Field(alias="videoId")
    video_title: str | None = Field(default=None, alias="videoTitle")
    available_languages: list[str] | None = Field(default=None, alias="availableLanguages")

    @classmethod
    def from_result(cls, video_id: str, result: ExtractionResult) -> "TranscriptData":
        """Build from an extraction result."""
        return cls(
            transcript=result.transcript,
            language=result.language,
            confidence=result.confidence_score,
            source=result.source_method,
            segments=result.segment_count,
            video_id=video_id,
            video_title=result.video_title,
            available_languages=result.available_languages or None,
        )


class TranscriptSuccessResponse(_CamelModel):
    """200 response body."""

    success: bool = True
    data: TranscriptData
    message: str
    attempts: list[AttemptSchema] | None = None


class TranscriptErrorResponse(_CamelModel):
    """4xx/5xx response body."""

    success: bool = False
    error: str
    message: str | None = None
    hint: str | None = None
    attempts: list[AttemptSchema] | None = None


class MethodNotAllowedResponse(BaseModel):
    """405 response body."""

    error: str
    hint: str | None = None
