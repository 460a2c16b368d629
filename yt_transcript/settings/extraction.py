"""Extraction chain configuration settings.

Minimum-content threshold, static per-method confidence scores
and per-strategy network timeouts.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExtractionSettings(BaseSettings):
    """Fallback chain configuration.

    Confidence scores are static per method and only reported to
    callers; they never influence strategy order.

    Attributes:
        default_language: Language used when a request names none.
        min_transcript_length: Shortest transcript accepted as a success.
    """

    default_language: str = Field(default="en", alias="DEFAULT_LANGUAGE")
    min_transcript_length: int = Field(default=50, ge=1, alias="MIN_TRANSCRIPT_LENGTH")

    # Confidence per method
    confidence_official_api: float = Field(default=0.97, alias="CONFIDENCE_OFFICIAL_API")
    confidence_innertube: float = Field(default=0.90, alias="CONFIDENCE_INNERTUBE")
    confidence_watch_page: float = Field(default=0.95, alias="CONFIDENCE_WATCH_PAGE")
    confidence_transcript_api: float = Field(default=0.93, alias="CONFIDENCE_TRANSCRIPT_API")

    # Timeouts per strategy (seconds)
    timeout_official_api: float = Field(default=15.0, gt=0, alias="STRATEGY_TIMEOUT_OFFICIAL_API")
    timeout_innertube: float = Field(default=15.0, gt=0, alias="STRATEGY_TIMEOUT_INNERTUBE")
    timeout_watch_page: float = Field(default=15.0, gt=0, alias="STRATEGY_TIMEOUT_WATCH_PAGE")
    timeout_transcript_api: float = Field(
        default=15.0,
        gt=0,
        alias="STRATEGY_TIMEOUT_TRANSCRIPT_API",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
