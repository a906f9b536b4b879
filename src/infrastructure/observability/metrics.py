"""Prometheus metrics instrumentation.

Defines and exports Prometheus metrics for the monitoring adapter.
Avoids high cardinality by omitting agreement and guarantee ids from labels.
"""

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

adapter_samples_total = Counter(
    name="sla_monitor_adapter_samples_total",
    documentation="Total number of samples produced by the monitoring adapter",
    labelnames=["variable"],
)

telemetry_repository_errors_total = Counter(
    name="sla_monitor_telemetry_repository_errors_total",
    documentation="Total number of variable retrievals aborted by a repository error",
    labelnames=["variable"],
)

adapter_get_values_duration_seconds = Histogram(
    name="sla_monitor_adapter_get_values_duration_seconds",
    documentation="Duration of a get_values call in seconds",
    buckets=(
        0.01,  # 10ms
        0.05,  # 50ms
        0.1,  # 100ms
        0.25,  # 250ms
        0.5,  # 500ms
        1.0,  # 1s
        2.5,  # 2.5s
        5.0,  # 5s
        10.0,  # 10s
        30.0,  # 30s
    ),
)

availability_percent = Histogram(
    name="sla_monitor_availability_percent",
    documentation="Computed availability percentages",
    buckets=(50.0, 90.0, 95.0, 99.0, 99.5, 99.9, 100.0),
)


def get_metrics_content() -> tuple[bytes, str]:
    """Generate Prometheus metrics in exposition format.

    Returns:
        Tuple of (metrics_bytes, content_type)
    """
    return generate_latest(), CONTENT_TYPE_LATEST


def record_samples(variable: str, count: int) -> None:
    """Record the number of samples produced for a variable."""
    adapter_samples_total.labels(variable=variable).inc(count)


def record_repository_error(variable: str) -> None:
    """Record a variable retrieval aborted by a repository error."""
    telemetry_repository_errors_total.labels(variable=variable).inc()


def record_get_values(duration: float) -> None:
    """Record the duration of a get_values call.

    Args:
        duration: Duration in seconds
    """
    adapter_get_values_duration_seconds.observe(duration)


def record_availability(value: float) -> None:
    """Record a computed availability percentage."""
    availability_percent.observe(value)
