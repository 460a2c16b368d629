"""Extraction error taxonomy.

Strategy-local errors are raised inside a strategy and converted
into a failed outcome by the strategy itself; only AllMethodsFailed
ever reaches the caller of the chain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from yt_transcript.extraction.models import AttemptLogEntry


class ExtractionError(Exception):
    """Base exception for transcript extraction errors."""

    pass


class NetworkFailure(ExtractionError):
    """Raised when an upstream is unreachable, times out or answers non-2xx."""

    pass


class QuotaExceeded(NetworkFailure):
    """Raised when the Data API quota is exhausted."""

    pass


class ParseFailure(ExtractionError):
    """Raised when an upstream response has an unexpected shape."""

    pass


class NoCaptionsAvailable(ExtractionError):
    """Raised when the upstream reports zero caption tracks."""

    pass


class InsufficientContent(ExtractionError):
    """Raised when a normalized transcript is under the minimum length."""

    def __init__(self, length: int) -> None:
        super().__init__(f"Insufficient content ({length} chars)")
        self.length = length


class AllMethodsFailed(ExtractionError):
    """Raised when every configured strategy failed.

    Attributes:
        attempts: Ordered attempt log of the request.
    """

    def __init__(self, attempts: list[AttemptLogEntry]) -> None:
        self.attempts = list(attempts)
        errors = "; ".join(f"{entry.method}: {entry.detail}" for entry in self.attempts)
        super().__init__(f"All extraction methods failed. Errors: {errors}")
