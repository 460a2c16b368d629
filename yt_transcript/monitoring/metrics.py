"""Prometheus metric definitions for the extraction chain.

Exposed through the /metrics endpoint mounted by
yt_transcript.monitoring.middleware.mount_metrics.
"""

from prometheus_client import Counter, Histogram

# =============================================================================
# STRATEGY METRICS
# =============================================================================

STRATEGY_ATTEMPTS_TOTAL = Counter(
    "yt_transcript_strategy_attempts_total",
    "Strategy attempts by method and outcome",
    ["method", "outcome"],
)

STRATEGY_DURATION = Histogram(
    "yt_transcript_strategy_duration_seconds",
    "Strategy attempt duration in seconds",
    ["method"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0],
)

# =============================================================================
# CHAIN METRICS
# =============================================================================

EXTRACTIONS_TOTAL = Counter(
    "yt_transcript_extractions_total",
    "Chain runs by final outcome and winning method",
    ["outcome", "method"],
)
