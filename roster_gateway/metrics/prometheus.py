# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics for the gateway, the directory client and the caches.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "roster_gateway_requests_total",
    "Total HTTP requests to the roster gateway",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "roster_gateway_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "roster_gateway_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Upstream directory ──
DIRECTORY_REQUESTS = Counter(
    "directory_requests_total",
    "Calls made to the upstream directory",
    ["query", "outcome"],
)
DIRECTORY_LATENCY = Histogram(
    "directory_request_duration_seconds",
    "Latency of upstream directory calls",
    ["query"],
)
DIRECTORY_RETRIES = Counter(
    "directory_retries_total",
    "Retry attempts against the upstream directory",
    ["query", "attempt"],
)

# ── Caches ──
CACHE_LOOKUPS = Counter(
    "cache_lookups_total",
    "Cache lookups by result (hit, miss, coalesced)",
    ["cache", "result"],
)
CACHE_REFRESH_FAILURES = Counter(
    "cache_refresh_failures_total",
    "Cache refreshes that failed and left the previous entry in place",
    ["cache"],
)
CACHE_INVALIDATIONS = Counter(
    "cache_invalidations_total",
    "Explicit cache invalidations",
    ["cache"],
)
ROSTER_SIZE = Gauge(
    "roster_members",
    "Number of members in the cached roster",
)

# ── Business Metrics (updated by service layer only) ──
LOGIN_ATTEMPTS = Counter(
    "login_attempts_total",
    "Login attempts by terminal outcome",
    ["outcome", "reason"],
)
PRESENCES_RECORDED = Counter(
    "presences_recorded_total",
    "Presence submissions forwarded to the directory",
)
