"""Prometheus metrics for purchases, ledger updates, and schedule computation"""

from decimal import Decimal

from prometheus_client import Counter, Histogram, Gauge

# Purchase metrics
purchase_counter = Counter(
    "credit_tracker_purchases_total",
    "Purchases recorded",
    ["installments"],  # 0 | 3 | 6 | 9 | 12 | 18 | 24
)

# Ledger metrics
ledger_update_counter = Counter(
    "credit_tracker_ledger_updates_total",
    "Ledger month mutations",
    ["operation"],  # increment | replace
)

# Storage metrics
storage_failure_counter = Counter(
    "credit_tracker_storage_failures_total",
    "Failed reads (recovered as empty) and writes against the backing store",
    ["operation"],
)

# Schedule metrics
schedule_duration_histogram = Histogram(
    "credit_tracker_schedule_duration_seconds",
    "Schedule and summary computation time",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)

remaining_debt_gauge = Gauge(
    "credit_tracker_remaining_debt",
    "Total remaining debt at the last schedule computation",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_purchase(installments: int) -> None:
    purchase_counter.labels(installments=str(installments)).inc()


def record_schedule(duration_seconds: float, total_remaining_debt: Decimal) -> None:
    """Record computation latency and the resulting debt level"""
    schedule_duration_histogram.observe(duration_seconds)
    remaining_debt_gauge.set(float(total_remaining_debt))
