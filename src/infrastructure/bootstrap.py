"""Process wiring for a host running assessment passes.

Usage:
    async with monitoring_lifespan() as adapter:
        bound = adapter.initialize(agreement)
        data = await bound.get_values(guarantee, ["availability"], now)
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from src.application.use_cases.monitoring_adapter import MonitoringAdapter
from src.infrastructure.config import get_settings
from src.infrastructure.config.settings import Settings
from src.infrastructure.observability import configure_logging, setup_tracing
from src.infrastructure.telemetry.cimi_telemetry_repository import (
    CimiTelemetryRepository,
)
from src.infrastructure.telemetry.factory import create_telemetry_repository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def monitoring_lifespan(
    settings: Settings | None = None,
) -> AsyncIterator[MonitoringAdapter]:
    """Set up the monitor and yield an unbound MonitoringAdapter.

    Startup:
    - Configure logging and tracing
    - Create the telemetry repository selected by TELEMETRY_BACKEND

    Shutdown:
    - Close the CIMI HTTP client
    - Flush and shut down the tracer provider
    """
    settings = settings or get_settings()

    configure_logging(settings.observability)
    provider = setup_tracing(settings.observability, settings.environment)

    repository = create_telemetry_repository(settings.telemetry)
    logger.info(f"SLA monitor started with telemetry backend {settings.telemetry.backend}")

    try:
        yield MonitoringAdapter(repository)
    finally:
        if isinstance(repository, CimiTelemetryRepository):
            await repository.close()
        provider.shutdown()
        logger.info("SLA monitor stopped")
