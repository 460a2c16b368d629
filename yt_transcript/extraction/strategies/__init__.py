"""Caption extraction strategies.

Classes:
    TranscriptStrategy: Abstract base with the attempt() contract.
    OfficialApiStrategy: YouTube Data API v3 + timedtext.
    InnertubeStrategy: Internal player API with cookies.
    WatchPageStrategy: Watch page HTML scraping.
    TranscriptApiStrategy: youtube-transcript-api adapter.
"""

from .base import TranscriptStrategy
from .innertube import InnertubeStrategy
from .official_api import OfficialApiStrategy
from .transcript_api import TranscriptApiStrategy, build_transcript_api
from .watch_page import WatchPageStrategy

__all__ = [
    "TranscriptStrategy",
    "OfficialApiStrategy",
    "InnertubeStrategy",
    "WatchPageStrategy",
    "TranscriptApiStrategy",
    "build_transcript_api",
]
