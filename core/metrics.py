"""
Prometheus metrics for the license validation service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Validation metrics
license_validations_total = Counter(
    "license_validations_total",
    "Total license validations by outcome",
    ["request_type", "code"],
)

license_validation_duration_seconds = Histogram(
    "license_validation_duration_seconds",
    "License validation duration in seconds",
    ["request_type"],
    buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

heartbeats_recorded_total = Counter(
    "heartbeats_recorded_total",
    "Total heartbeats upserted",
)

# Issuance metrics
licenses_issued_total = Counter(
    "licenses_issued_total",
    "Total licenses issued",
    ["team_id"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
