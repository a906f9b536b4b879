"""Repository interfaces - Abstract data access contracts."""

from src.domain.repositories.telemetry_repository import (
    RepositoryDataError,
    RepositoryUnavailableError,
    TelemetryRepositoryError,
    TelemetryRepositoryInterface,
)

__all__ = [
    "TelemetryRepositoryInterface",
    "TelemetryRepositoryError",
    "RepositoryUnavailableError",
    "RepositoryDataError",
]
