"""Prometheus metrics for monitoring quote volume, risk mix and store health"""

from prometheus_client import Counter, Histogram

# Quote metrics
quote_created_counter = Counter(
    "solar_quote_created_total",
    "Total quotes created",
    ["risk_band"],  # A | B | C
)

quote_principal_histogram = Histogram(
    "solar_quote_principal_amount",
    "Financed principal per quote",
    buckets=[0, 2_500, 5_000, 10_000, 20_000, 40_000, 80_000],
)

quote_lookup_counter = Counter(
    "solar_quote_lookup_total",
    "Quote read operations",
    ["operation", "scope"],  # get | list ; own | all | miss
)

# Store metrics
store_failures_counter = Counter(
    "store_failures_total",
    "Failed persistence operations",
    ["operation"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_quote_created(risk_band: str, principal_amount: float) -> None:
    """Record creation metrics for monitoring the risk band mix and financed amounts"""
    quote_created_counter.labels(risk_band=risk_band).inc()
    quote_principal_histogram.observe(principal_amount)
