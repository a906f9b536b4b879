"""In-memory telemetry repository for testing and development.

This module provides an implementation of TelemetryRepositoryInterface that
serves events from in-process lists instead of querying a CIMI server. It
applies the same filter semantics as the CIMI queries.
"""

from datetime import datetime

from src.domain.entities.service_instance import ServiceInstance
from src.domain.entities.telemetry import (
    Bounded,
    ServiceContainerMetric,
    ServiceOperationReport,
)
from src.domain.repositories.telemetry_repository import (
    TelemetryRepositoryInterface,
)


class InMemoryTelemetryRepository(TelemetryRepositoryInterface):
    """Telemetry repository holding its events in memory.

    Useful for:
    - Local development without a CIMI server
    - Unit tests with predictable data
    """

    def __init__(
        self,
        service_instances: list[ServiceInstance] | None = None,
        operation_reports: list[ServiceOperationReport] | None = None,
        container_metrics: list[ServiceContainerMetric] | None = None,
    ):
        self._service_instances = list(service_instances or [])
        self._operation_reports = list(operation_reports or [])
        self._container_metrics = list(container_metrics or [])

    def add_service_instance(self, service_instance: ServiceInstance) -> None:
        self._service_instances.append(service_instance)

    def add_operation_report(self, report: ServiceOperationReport) -> None:
        self._operation_reports.append(report)

    def add_container_metric(self, metric: ServiceContainerMetric) -> None:
        self._container_metrics.append(metric)

    async def list_service_operation_reports(
        self, service_instance_id: str, since: datetime
    ) -> list[ServiceOperationReport]:
        return [
            r
            for r in self._operation_reports
            if r.service_instance == service_instance_id and r.created > since
        ]

    async def list_service_instances(self, agreement_id: str) -> list[ServiceInstance]:
        return [si for si in self._service_instances if si.agreement == agreement_id]

    async def list_service_container_metrics(
        self,
        device_id: str,
        container_id: str,
        interval_start: datetime,
        interval_end: datetime,
    ) -> list[ServiceContainerMetric]:
        return [
            m
            for m in self._container_metrics
            if (not device_id or m.device_id == device_id)
            and (not container_id or m.container_id == container_id)
            and self._overlaps(m, interval_start, interval_end)
        ]

    @staticmethod
    def _overlaps(
        metric: ServiceContainerMetric,
        interval_start: datetime,
        interval_end: datetime,
    ) -> bool:
        """True if the metric interval overlaps (interval_start, interval_end]."""
        if metric.start_time > interval_end:
            return False
        if isinstance(metric.stop_time, Bounded):
            return metric.stop_time.end > interval_start
        return True
