"""Prometheus metrics for backend calls, report exports and gateway requests"""

from prometheus_client import Counter, Histogram

# Backend API metrics
backend_latency_histogram = Histogram(
    "portal_backend_request_seconds",
    "Backend API response time",
    ["endpoint"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 15.0],
)

backend_failure_counter = Counter(
    "portal_backend_failures_total",
    "Failed backend API calls",
    ["status"],  # HTTP status code | timeout | network
)

# Export metrics
export_counter = Counter(
    "portal_exports_total",
    "Reports exported",
    ["format", "outcome"],  # pdf | xlsx | csv | print ; ok | error
)

export_rows_histogram = Histogram(
    "portal_export_rows",
    "Data rows per exported report",
    buckets=[0, 10, 50, 100, 500, 1000, 5000],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_export(fmt: str, row_count: int, succeeded: bool = True) -> None:
    """Record one export attempt by format and outcome"""
    export_counter.labels(format=fmt, outcome="ok" if succeeded else "error").inc()
    if succeeded:
        export_rows_histogram.observe(row_count)


def record_backend_failure(status: int | str) -> None:
    backend_failure_counter.labels(status=str(status)).inc()
