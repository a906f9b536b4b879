"""Integration tests for the monitor lifespan wiring."""

from datetime import datetime, timedelta, timezone

import pytest
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

from src.application.use_cases.monitoring_adapter import MonitoringAdapter
from src.domain.entities.agreement import Agreement, AgreementDetails, Guarantee
from src.infrastructure.bootstrap import monitoring_lifespan
from src.infrastructure.config.settings import (
    ObservabilitySettings,
    Settings,
    TelemetrySettings,
)
from src.infrastructure.telemetry.cimi_telemetry_repository import (
    CimiTelemetryRepository,
)
from src.infrastructure.telemetry.in_memory_telemetry_repository import (
    InMemoryTelemetryRepository,
)

NOW = datetime(2019, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_settings(backend: str) -> Settings:
    return Settings(
        environment="test",
        telemetry=TelemetrySettings(backend=backend, url="https://cimi.example.org/api"),
        observability=ObservabilitySettings(
            exporter_otlp_endpoint="", log_json_format=False
        ),
    )


@pytest.fixture(autouse=True)
def uninstrument_httpx():
    yield
    HTTPXClientInstrumentor().uninstrument()


class TestMonitoringLifespan:
    """Tests for monitoring_lifespan()."""

    @pytest.mark.asyncio
    async def test_memory_backend_yields_working_adapter(self):
        agreement = Agreement(
            id="a01",
            name="Agreement 01",
            details=AgreementDetails(
                id="a01", name="Agreement 01", creation=NOW - timedelta(hours=1)
            ),
        )

        async with monitoring_lifespan(make_settings("memory")) as adapter:
            assert isinstance(adapter, MonitoringAdapter)
            assert isinstance(adapter._repository, InMemoryTelemetryRepository)

            data = await adapter.initialize(agreement).get_values(
                Guarantee(name="*"), ["execution_time"], NOW
            )

        assert data == []

    @pytest.mark.asyncio
    async def test_cimi_client_closed_on_exit(self):
        async with monitoring_lifespan(make_settings("cimi")) as adapter:
            repository = adapter._repository
            assert isinstance(repository, CimiTelemetryRepository)
            assert not repository.client.is_closed

        assert repository.client.is_closed

    @pytest.mark.asyncio
    async def test_cleanup_runs_when_body_raises(self):
        with pytest.raises(RuntimeError, match="pass failed"):
            async with monitoring_lifespan(make_settings("cimi")) as adapter:
                repository = adapter._repository
                raise RuntimeError("pass failed")

        assert repository.client.is_closed
