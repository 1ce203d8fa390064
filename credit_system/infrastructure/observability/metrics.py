"""Prometheus metrics for monitoring customer registrations and credit activity"""

from prometheus_client import Counter, Histogram

# Registration metrics
customer_created_counter = Counter(
    "customer_created_total",
    "Total customers registered",
)

credit_created_counter = Counter(
    "credit_created_total",
    "Total credits created",
    ["installments_bucket"],  # 1-12 | 13-24 | 25+
)

# Lookup failures
credit_lookup_failures_counter = Counter(
    "credit_lookup_failures_total",
    "Failed credit lookups by reason",
    ["reason"],  # not_found | ownership_mismatch
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_credit_created(number_of_installments: int) -> None:
    """Record credit creation, bucketed by schedule length"""
    if number_of_installments <= 12:
        bucket = "1-12"
    elif number_of_installments <= 24:
        bucket = "13-24"
    else:
        bucket = "25+"

    credit_created_counter.labels(installments_bucket=bucket).inc()
