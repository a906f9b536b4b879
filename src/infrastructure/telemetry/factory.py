"""Telemetry repository factory."""

from src.domain.repositories.telemetry_repository import (
    TelemetryRepositoryInterface,
)
from src.infrastructure.config.settings import TelemetrySettings, get_settings
from src.infrastructure.telemetry.cimi_telemetry_repository import (
    CimiTelemetryRepository,
)
from src.infrastructure.telemetry.in_memory_telemetry_repository import (
    InMemoryTelemetryRepository,
)


def create_telemetry_repository(
    config: TelemetrySettings | None = None,
) -> TelemetryRepositoryInterface:
    """Create the telemetry repository selected by configuration.

    Args:
        config: Telemetry settings (defaults to the global settings)

    Returns:
        CimiTelemetryRepository for backend "cimi", an empty
        InMemoryTelemetryRepository for backend "memory"
    """
    config = config or get_settings().telemetry
    if config.backend == "memory":
        return InMemoryTelemetryRepository()
    return CimiTelemetryRepository(
        base_url=config.url,
        auth_token=config.auth_token,
        timeout=config.timeout_seconds,
        insecure=config.insecure,
        retry_attempts=config.retry_attempts,
    )
