"""Use cases - Application-specific business rules.

This package contains the services that orchestrate domain logic
for an assessment pass.
"""

from src.application.use_cases.monitoring_adapter import (
    AdapterNotInitializedError,
    MonitoringAdapter,
)

__all__ = [
    "MonitoringAdapter",
    "AdapterNotInitializedError",
]
