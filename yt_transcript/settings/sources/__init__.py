"""Upstream source settings.

Exports configuration classes for the YouTube endpoints the
caption strategies talk to.
"""

from yt_transcript.settings.sources.youtube import YouTubeSettings

__all__ = [
    "YouTubeSettings",
]
