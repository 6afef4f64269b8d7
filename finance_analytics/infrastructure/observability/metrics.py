"""Prometheus metrics for analytics volume, latency and rejected input"""

from prometheus_client import Counter, Histogram

# Analytics metrics
analytics_counter = Counter(
    "finance_analytics_total",
    "Total analytics runs",
    ["period"],  # bounded | all_time
)

transactions_processed_counter = Counter(
    "finance_analytics_transactions_processed_total",
    "Transactions fed into the analytics engine",
)

malformed_transactions_counter = Counter(
    "finance_analytics_malformed_transactions_total",
    "Payloads rejected because a transaction could not be parsed",
)

analytics_duration_histogram = Histogram(
    "finance_analytics_duration_seconds",
    "Time spent computing dashboard aggregates",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_analysis(transaction_count: int, has_period: bool, duration_seconds: float) -> None:
    """Record one analytics run"""
    analytics_counter.labels(period="bounded" if has_period else "all_time").inc()
    transactions_processed_counter.inc(transaction_count)
    analytics_duration_histogram.observe(duration_seconds)
