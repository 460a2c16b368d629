"""FastAPI dependency providers.

Extractors and the third-party transcript client are built once per
process and shared by all requests; tests replace them through
``app.dependency_overrides``.
"""

from functools import lru_cache

from youtube_transcript_api import YouTubeTranscriptApi

from yt_transcript.extraction.chain import (
    FallbackExtractor,
    build_backup_extractor,
    build_primary_extractor,
)
from yt_transcript.extraction.strategies import build_transcript_api


@lru_cache
def get_transcript_api() -> YouTubeTranscriptApi:
    """Return the shared youtube-transcript-api client."""
    return build_transcript_api()


@lru_cache
def get_primary_extractor() -> FallbackExtractor:
    """Return the full fallback chain."""
    return build_primary_extractor(get_transcript_api())


@lru_cache
def get_backup_extractor() -> FallbackExtractor:
    """Return the backup chain (third-party library only)."""
    return build_backup_extractor(get_transcript_api())
