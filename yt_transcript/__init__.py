"""YouTube transcript extraction service.

Extracts video transcripts through a prioritized chain of caption
sources and serves them over a small REST API.
"""

__version__ = "1.0.0"
