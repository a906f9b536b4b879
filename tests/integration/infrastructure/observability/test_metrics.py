"""Integration tests for Prometheus metrics.

Tests that adapter metrics are recorded and exposed in exposition format.
"""

from datetime import datetime, timedelta, timezone

import pytest
from prometheus_client import REGISTRY

from src.application.use_cases.monitoring_adapter import MonitoringAdapter
from src.domain.entities.agreement import (
    Aggregation,
    Agreement,
    AgreementDetails,
    Guarantee,
    Variable,
)
from src.infrastructure.observability import metrics
from src.infrastructure.telemetry.in_memory_telemetry_repository import (
    InMemoryTelemetryRepository,
)


def content() -> str:
    body, _ = metrics.get_metrics_content()
    return body.decode("utf-8")


class TestMetricsRecording:
    """Tests for metric recording functions."""

    def test_content_type(self):
        _, content_type = metrics.get_metrics_content()

        assert "text/plain" in content_type

    def test_record_samples(self):
        metrics.record_samples("execution_time", 3)

        assert "sla_monitor_adapter_samples_total" in content()
        assert 'variable="execution_time"' in content()

    def test_record_repository_error(self):
        metrics.record_repository_error("availability")

        assert "sla_monitor_telemetry_repository_errors_total" in content()

    def test_record_get_values(self):
        metrics.record_get_values(0.05)

        assert "sla_monitor_adapter_get_values_duration_seconds" in content()

    def test_record_availability(self):
        metrics.record_availability(99.9)

        assert "sla_monitor_availability_percent" in content()


class TestAdapterMetrics:
    """Tests that the monitoring adapter records metrics."""

    @pytest.mark.asyncio
    async def test_get_values_records_availability(self):
        now = datetime(2019, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
        agreement = Agreement(
            id="a01",
            name="Agreement 01",
            details=AgreementDetails(
                id="a01",
                name="Agreement 01",
                creation=now - timedelta(hours=1),
                variables=[
                    Variable(name="availability", aggregation=Aggregation(window=600))
                ],
            ),
        )
        adapter = MonitoringAdapter(InMemoryTelemetryRepository()).initialize(agreement)
        before = REGISTRY.get_sample_value("sla_monitor_availability_percent_count") or 0

        await adapter.get_values(Guarantee(name="*"), ["availability"], now)

        after = REGISTRY.get_sample_value("sla_monitor_availability_percent_count")
        assert after == before + 1
