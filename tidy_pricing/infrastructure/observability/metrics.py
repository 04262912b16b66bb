"""Prometheus metrics for pricing resolution, quoting and cancellation flows"""

from prometheus_client import Counter, Histogram

# Pricing config metrics
pricing_resolution_counter = Counter(
    "pricing_config_resolutions_total",
    "Pricing configuration resolutions",
    ["source"],  # database | config
)

pricing_fetch_failures_counter = Counter(
    "pricing_config_fetch_failures_total",
    "Failed or empty pricing service fetches that fell back to static pricing",
)

pricing_service_latency_histogram = Histogram(
    "pricing_service_latency_seconds",
    "Pricing service response time",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

# Calculator metrics
quote_counter = Counter(
    "pricing_quotes_total",
    "Job quotes computed",
)

cancellation_evaluation_counter = Counter(
    "pricing_cancellation_evaluations_total",
    "Cancellation outcomes evaluated",
    ["penalty_window"],  # inside | outside
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_resolution(source: str, failed: bool) -> None:
    """Record where the active pricing came from"""
    pricing_resolution_counter.labels(source=source).inc()
    if failed:
        pricing_fetch_failures_counter.inc()


def record_cancellation(within_penalty_window: bool) -> None:
    cancellation_evaluation_counter.labels(penalty_window="inside" if within_penalty_window else "outside").inc()
