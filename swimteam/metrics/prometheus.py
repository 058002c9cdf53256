# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "swimteam_requests_total",
    "Total HTTP requests to the scheduling service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "swimteam_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "swimteam_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
ROTATION_GENERATIONS = Counter(
    "swimteam_rotation_generations_total",
    "Leader rotation generations created",
    ["mode"],
)
ASSIGNMENTS_CREATED = Counter(
    "swimteam_assignments_created_total",
    "Leader duty assignments created",
)
ASSIGNMENTS_SUPERSEDED = Counter(
    "swimteam_assignments_superseded_total",
    "Leader duty assignments flagged inactive by a newer generation",
)
ACTIVE_ASSIGNMENTS = Gauge(
    "swimteam_active_assignments",
    "Number of currently active leader duty assignments",
)
LEADER_LOOKUPS = Counter(
    "swimteam_leader_lookups_total",
    "Leader-for-date lookups performed",
    ["found"],
)
ROSTER_SIZE = Gauge(
    "swimteam_roster_size",
    "Number of members in the leader roster",
)
SESSIONS_CREATED = Counter(
    "swimteam_sessions_created_total",
    "Training sessions created through the API (templates included)",
    ["recurring"],
)
OCCURRENCES_MATERIALIZED = Counter(
    "swimteam_occurrences_materialized_total",
    "Occurrences expanded from recurring templates",
    ["pattern"],
)
RECURRENCE_RULES_DEGRADED = Counter(
    "swimteam_recurrence_rules_degraded_total",
    "Recurring templates whose rule produced no occurrences",
)
