"""Prometheus metrics for the notepad service.

All metric objects are defined here so they can be imported from any module.
"""

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# Store metrics
# ---------------------------------------------------------------------------

STORE_OPERATIONS = Counter(
    "notepad_store_operations_total",
    "Total number of remote collection operations",
    ["operation", "status"],  # create/update/delete/list_all, success/error
)

STORE_DURATION = Histogram(
    "notepad_store_duration_seconds",
    "Duration of remote collection operations in seconds",
    ["operation"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

# ---------------------------------------------------------------------------
# Controller metrics
# ---------------------------------------------------------------------------

NOTES_LOADED = Gauge(
    "notepad_notes_loaded",
    "Number of notes in the controller after the last reload",
)

# ---------------------------------------------------------------------------
# HTTP request metrics
# ---------------------------------------------------------------------------

HTTP_REQUESTS = Counter(
    "notepad_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_DURATION = Histogram(
    "notepad_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["endpoint"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0),
)
