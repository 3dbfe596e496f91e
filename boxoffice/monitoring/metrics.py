"""Prometheus metric definitions for upstream calls and rankings.

HTTP request metrics live in ``boxoffice.monitoring.middleware``.
"""

from prometheus_client import Counter, Histogram

# =============================================================================
# UPSTREAM (TMDB) METRICS
# =============================================================================

UPSTREAM_REQUESTS_TOTAL = Counter(
    "boxoffice_upstream_requests_total",
    "Total upstream TMDB requests",
    ["endpoint", "outcome"],
)

UPSTREAM_REQUEST_DURATION = Histogram(
    "boxoffice_upstream_request_duration_seconds",
    "Upstream TMDB request duration in seconds",
    ["endpoint"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# =============================================================================
# RANKING METRICS
# =============================================================================

RANKINGS_TOTAL = Counter(
    "boxoffice_rankings_total",
    "Ranking requests by outcome",
    ["outcome"],
)

RANKING_CANDIDATES = Histogram(
    "boxoffice_ranking_candidates",
    "Unique candidates gathered per ranking request",
    buckets=[0, 5, 10, 20, 40, 60],
)
