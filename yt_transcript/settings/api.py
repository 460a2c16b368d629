"""API configuration settings.

FastAPI server and CORS settings for the transcript endpoints.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseSettings):
    """FastAPI configuration.

    Attributes:
        host: API host address.
        port: API port.
        reload: Enable auto-reload in development.
        title: OpenAPI title.
        version: Service version reported by /health.
    """

    host: str = Field(default="0.0.0.0", alias="API_HOST")
    port: int = Field(default=8000, alias="API_PORT")
    reload: bool = Field(default=False, alias="API_RELOAD")
    title: str = Field(default="YouTube Transcript API", alias="API_TITLE")
    version: str = Field(default="1.0.0", alias="API_VERSION")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class CORSSettings(BaseSettings):
    """CORS configuration.

    Every response carries these headers, preflight or not.

    Attributes:
        allow_origin: Value of Access-Control-Allow-Origin.
        allow_headers: Value of Access-Control-Allow-Headers.
        allow_methods: Value of Access-Control-Allow-Methods.
    """

    allow_origin: str = Field(default="*", alias="CORS_ALLOW_ORIGIN")
    allow_headers: str = Field(
        default="Content-Type, Authorization",
        alias="CORS_ALLOW_HEADERS",
    )
    allow_methods: str = Field(default="POST, OPTIONS", alias="CORS_ALLOW_METHODS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def headers(self) -> dict[str, str]:
        """CORS headers as a response header mapping."""
        return {
            "Access-Control-Allow-Origin": self.allow_origin,
            "Access-Control-Allow-Headers": self.allow_headers,
            "Access-Control-Allow-Methods": self.allow_methods,
        }
