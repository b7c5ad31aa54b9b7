"""Prometheus metrics for monitoring access denials, flag activity, and request latency"""

from prometheus_client import Counter, Histogram

# Access control metrics
access_denied_counter = Counter(
    "accountstack_access_denied_total",
    "Requests for entities owned by another user",
    ["entity"],  # account | insight
)

feature_disabled_counter = Counter(
    "accountstack_feature_disabled_total",
    "Requests rejected because a feature flag is off",
    ["feature"],
)

# Feature flag metrics
flag_update_counter = Counter(
    "accountstack_flag_updates_total",
    "Administrative feature flag writes",
    ["flag"],
)

# Query metrics
transactions_returned_histogram = Histogram(
    "accountstack_transactions_returned",
    "Transactions returned per listing request",
    buckets=[0, 1, 5, 10, 25, 50, 100, 250, 1000],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_access_denied(entity: str) -> None:
    access_denied_counter.labels(entity=entity).inc()


def record_feature_disabled(feature: str) -> None:
    feature_disabled_counter.labels(feature=feature).inc()
