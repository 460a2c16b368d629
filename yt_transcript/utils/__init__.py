"""Service utilities package: logging."""

from yt_transcript.utils.logger import setup_logger

__all__ = ["setup_logger"]
