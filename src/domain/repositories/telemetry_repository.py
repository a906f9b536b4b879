"""Interface for querying the telemetry repository.

This interface abstracts the telemetry source (a CIMI server, an in-memory
store, etc.) allowing the domain layer to remain independent of the transport
and wire format used to fetch operation reports, service instances and
container metrics.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from src.domain.entities.service_instance import ServiceInstance
from src.domain.entities.telemetry import (
    ServiceContainerMetric,
    ServiceOperationReport,
)


class TelemetryRepositoryError(Exception):
    """Base exception for telemetry repository errors."""

    pass


class RepositoryUnavailableError(TelemetryRepositoryError):
    """Telemetry repository is unreachable or returned an error status."""

    pass


class RepositoryDataError(TelemetryRepositoryError):
    """Telemetry repository returned a malformed or unexpected response."""

    pass


class TelemetryRepositoryInterface(ABC):
    """Interface for querying raw telemetry events.

    Implementations must be safe for use by several adapters concurrently.
    All methods raise TelemetryRepositoryError subclasses on failure.
    """

    @abstractmethod
    async def list_service_operation_reports(
        self, service_instance_id: str, since: datetime
    ) -> list[ServiceOperationReport]:
        """Returns the operation reports of a service instance newer than a date.

        Args:
            service_instance_id: Identifier of the service instance
            since: Only reports created/updated after this time are returned

        Returns:
            List of ServiceOperationReport, empty if none found

        Raises:
            RepositoryUnavailableError: On transport failure
            RepositoryDataError: On malformed response
        """
        pass

    @abstractmethod
    async def list_service_instances(self, agreement_id: str) -> list[ServiceInstance]:
        """Returns the service instances bound to an agreement.

        Args:
            agreement_id: Identifier of the agreement

        Returns:
            List of ServiceInstance, empty if none found

        Raises:
            RepositoryUnavailableError: On transport failure
            RepositoryDataError: On malformed response
        """
        pass

    @abstractmethod
    async def list_service_container_metrics(
        self,
        device_id: str,
        container_id: str,
        interval_start: datetime,
        interval_end: datetime,
    ) -> list[ServiceContainerMetric]:
        """Returns the container up-intervals overlapping (interval_start, interval_end].

        Args:
            device_id: Device filter; empty string means no restriction
            container_id: Container filter; empty string means no restriction
            interval_start: Lower bound of the query interval
            interval_end: Upper bound of the query interval

        Returns:
            List of ServiceContainerMetric, empty if none found

        Raises:
            RepositoryUnavailableError: On transport failure
            RepositoryDataError: On malformed response
        """
        pass
