"""Observability infrastructure module.

Provides OpenTelemetry tracing, structured logging, and Prometheus metrics.
"""

from src.infrastructure.observability.logging import configure_logging, get_logger
from src.infrastructure.observability.metrics import (
    get_metrics_content,
    record_availability,
    record_get_values,
    record_repository_error,
    record_samples,
)
from src.infrastructure.observability.tracing import get_tracer, setup_tracing

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Tracing
    "setup_tracing",
    "get_tracer",
    # Metrics
    "get_metrics_content",
    "record_samples",
    "record_repository_error",
    "record_get_values",
    "record_availability",
]
