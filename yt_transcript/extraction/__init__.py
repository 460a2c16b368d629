"""Transcript extraction package.

Extracts YouTube transcripts by trying several independent caption
sources in a fixed priority order until one yields usable text.

Classes:
    FallbackExtractor: Chain driver returning the first success.
    ExtractionResult: Normalized transcript with metadata.
    AttemptLog: Ordered per-request record of strategy outcomes.

Exceptions:
    AllMethodsFailed: Every strategy failed (carries the attempt log).

Example:
    >>> from yt_transcript.extraction import build_primary_extractor
    >>>
    >>> extractor = build_primary_extractor()
    >>> result = extractor.extract("dQw4w9WgXcQ", language="en")
    >>> result.source_method, result.segment_count
"""

from .chain import FallbackExtractor, build_backup_extractor, build_primary_extractor
from .errors import (
    AllMethodsFailed,
    ExtractionError,
    InsufficientContent,
    NetworkFailure,
    NoCaptionsAvailable,
    ParseFailure,
    QuotaExceeded,
)
from .models import (
    AttemptLog,
    AttemptLogEntry,
    CaptionTrack,
    ExtractionRequest,
    ExtractionResult,
    Failure,
    Success,
    TranscriptSegment,
)

__all__ = [
    # Chain
    "FallbackExtractor",
    "build_primary_extractor",
    "build_backup_extractor",
    # Models
    "AttemptLog",
    "AttemptLogEntry",
    "CaptionTrack",
    "ExtractionRequest",
    "ExtractionResult",
    "Failure",
    "Success",
    "TranscriptSegment",
    # Errors
    "ExtractionError",
    "NetworkFailure",
    "QuotaExceeded",
    "ParseFailure",
    "NoCaptionsAvailable",
    "InsufficientContent",
    "AllMethodsFailed",
]
