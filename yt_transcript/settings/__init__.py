"""Centralized configuration for the transcript service.

All configuration values are sourced from environment variables
(.env file) and every setting has a safe default, so the service
starts without any configuration. A YouTube Data API key enables
the official-API strategy.

Usage:
    from yt_transcript.settings import settings

    # Access sub-settings
    settings.youtube.api_key
    settings.extraction.min_transcript_length
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from yt_transcript.settings.api import APISettings, CORSSettings
from yt_transcript.settings.base import LoggingSettings
from yt_transcript.settings.extraction import ExtractionSettings
from yt_transcript.settings.sources import YouTubeSettings

__all__ = [
    # Main
    "Settings",
    "settings",
    # Base
    "LoggingSettings",
    # API
    "APISettings",
    "CORSSettings",
    # Sources
    "YouTubeSettings",
    # Extraction
    "ExtractionSettings",
    # Utilities
    "get_masked_settings",
]


# =============================================================================
# GLOBAL SETTINGS
# =============================================================================


class Settings(BaseSettings):
    """Global application settings.

    Aggregates all configuration sections into a single object.
    Access via the singleton: `from yt_transcript.settings import settings`
    """

    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    api: APISettings = Field(default_factory=APISettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)

    youtube: YouTubeSettings = Field(default_factory=YouTubeSettings)
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"development", "production", "test"}
        v_lower = v.lower()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid ENVIRONMENT. Valid: {valid_envs}")
        return v_lower


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

settings = Settings()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_masked_settings() -> dict[str, Any]:
    """Return settings dict with sensitive values masked.

    Returns:
        Configuration dictionary safe for logging.
    """
    config = settings.model_dump()
    mask = "***MASKED***"

    secrets = [
        ("youtube", "api_key"),
        ("youtube", "cookies_raw"),
    ]

    for section, key in secrets:
        if section in config and key in config[section] and config[section][key]:
            config[section][key] = mask

    return config
