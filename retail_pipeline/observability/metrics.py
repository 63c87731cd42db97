"""
Prometheus metrics for the retail sales pipeline.

Counts what each run kept and dropped, and how long it took.
"""
from decimal import Decimal

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()


records_processed_total = Counter(
    name="retail_records_processed_total",
    documentation="Total number of raw records processed",
    labelnames=["source", "status"],  # status: clean, dropped
    registry=REGISTRY,
)

records_dropped_by_rule_total = Counter(
    name="retail_records_dropped_by_rule_total",
    documentation="Raw records failing each cleaning rule",
    labelnames=["source", "rule_name"],
    registry=REGISTRY,
)

run_duration_seconds = Histogram(
    name="retail_run_duration_seconds",
    documentation="Time spent on one pipeline run in seconds",
    labelnames=["source"],
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0],
    registry=REGISTRY,
)

runs_total = Counter(
    name="retail_runs_total",
    documentation="Total number of pipeline runs",
    labelnames=["source", "status"],  # status: success, failure
    registry=REGISTRY,
)

total_revenue = Gauge(
    name="retail_total_revenue",
    documentation="Total revenue computed by the last run",
    labelnames=["source"],
    registry=REGISTRY,
)


def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format
    """
    return generate_latest(REGISTRY)


def record_run(
    source: str,
    clean_records: int,
    dropped_records: int,
    dropped_by_rule: dict[str, int],
    duration_seconds: float,
    revenue: Decimal | None = None,
) -> None:
    """
    Record the outcome of a successful run.

    Args:
        source: Input identifier (file path, table name, "memory")
        clean_records: Records that survived cleaning
        dropped_records: Records removed by cleaning
        dropped_by_rule: Failure count per cleaning rule
        duration_seconds: Run duration
        revenue: Total revenue, when computed
    """
    records_processed_total.labels(source=source, status="clean").inc(clean_records)
    records_processed_total.labels(source=source, status="dropped").inc(dropped_records)
    for rule_name, count in dropped_by_rule.items():
        records_dropped_by_rule_total.labels(source=source, rule_name=rule_name).inc(count)
    run_duration_seconds.labels(source=source).observe(duration_seconds)
    runs_total.labels(source=source, status="success").inc()
    if revenue is not None:
        total_revenue.labels(source=source).set(float(revenue))


def record_failure(source: str) -> None:
    runs_total.labels(source=source, status="failure").inc()
