"""CIMI telemetry repository.

This module provides a client for querying a CIMI server for the telemetry
used by the monitoring adapter: service-operation-report,
service-instance and service-container-metric resources.

Resources are filtered with the CIMI $filter syntax, e.g.:
- service-operation-report?$filter=(serviceInstance/href="si-1")and(created>"2019-01-01T00:00:00Z")
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.domain.entities.service_instance import ServiceInstance
from src.domain.entities.telemetry import (
    ServiceContainerMetric,
    ServiceOperationReport,
)
from src.domain.entities.timestamps import require_aware
from src.domain.repositories.telemetry_repository import (
    RepositoryDataError,
    RepositoryUnavailableError,
    TelemetryRepositoryInterface,
)
from src.infrastructure.config.settings import get_settings
from src.infrastructure.telemetry.cimi_schemas import (
    ServiceContainerMetricCollection,
    ServiceInstanceCollection,
    ServiceInstanceModel,
    ServiceOperationReportCollection,
)

logger = logging.getLogger(__name__)

PATH_OPERATION_REPORTS = "service-operation-report"
PATH_SERVICE_INSTANCES = "service-instance"
PATH_CONTAINER_METRICS = "service-container-metric"

AUTH_HEADER = "slipstream-authn-info"

CollectionT = TypeVar("CollectionT", bound=BaseModel)


def format_time(t: datetime) -> str:
    """Format an aware timestamp as RFC 3339 UTC, as accepted by CIMI filters.

    Raises:
        ValueError: If t is naive (its zone would be guessed from the host)
    """
    require_aware(t, "CIMI filter time")
    return t.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class CimiTelemetryRepository(TelemetryRepositoryInterface):
    """Telemetry repository backed by a CIMI server.

    One httpx.AsyncClient is shared by every request, so a single repository
    can serve adapters for many agreements concurrently. Transport errors are
    retried a bounded number of times before surfacing as
    RepositoryUnavailableError.

    Attributes:
        base_url: CIMI API base URL (e.g. https://localhost:10443/api)
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        base_url: str | None = None,
        auth_token: str | None = None,
        timeout: float | None = None,
        insecure: bool | None = None,
        retry_attempts: int | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the CIMI repository.

        Args:
            base_url: CIMI API base URL (defaults to settings)
            auth_token: Value of the slipstream-authn-info header (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            insecure: Skip TLS verification (defaults to settings)
            retry_attempts: Attempts per request on transport errors (defaults to settings)
            client: Preconfigured HTTP client (tests)
        """
        config = get_settings().telemetry
        self.base_url = (base_url or config.url).rstrip("/")
        self.timeout = timeout or config.timeout_seconds
        self.retry_attempts = max(1, retry_attempts or config.retry_attempts)
        auth_token = config.auth_token if auth_token is None else auth_token
        insecure = config.insecure if insecure is None else insecure

        headers = {AUTH_HEADER: auth_token} if auth_token else {}
        self.client = client or httpx.AsyncClient(
            timeout=self.timeout,
            verify=not insecure,
            headers=headers,
        )

        logger.info(
            "CIMI telemetry repository configured: url=%s insecure=%s timeout=%s",
            self.base_url,
            insecure,
            self.timeout,
        )

    async def close(self) -> None:
        """Close the HTTP client connection."""
        await self.client.aclose()

    async def __aenter__(self) -> "CimiTelemetryRepository":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def list_service_operation_reports(
        self, service_instance_id: str, since: datetime
    ) -> list[ServiceOperationReport]:
        cimi_filter = (
            f'(serviceInstance/href="{service_instance_id}")'
            f'and(created>"{format_time(since)}")'
        )
        collection = await self._get(
            PATH_OPERATION_REPORTS, cimi_filter, ServiceOperationReportCollection
        )
        return [r.to_entity() for r in collection.service_operation_reports]

    async def list_service_instances(self, agreement_id: str) -> list[ServiceInstance]:
        cimi_filter = f'agreement="{agreement_id}"'
        collection = await self._get(
            PATH_SERVICE_INSTANCES, cimi_filter, ServiceInstanceCollection
        )
        return [si.to_entity() for si in collection.service_instances]

    async def list_service_container_metrics(
        self,
        device_id: str,
        container_id: str,
        interval_start: datetime,
        interval_end: datetime,
    ) -> list[ServiceContainerMetric]:
        cimi_filter = self.container_metrics_filter(
            device_id, container_id, interval_start, interval_end
        )
        collection = await self._get(
            PATH_CONTAINER_METRICS, cimi_filter, ServiceContainerMetricCollection
        )
        return [m.to_entity() for m in collection.service_container_metrics]

    @staticmethod
    def container_metrics_filter(
        device_id: str,
        container_id: str,
        interval_start: datetime,
        interval_end: datetime,
    ) -> str:
        """Build the $filter selecting metrics overlapping (interval_start, interval_end].

        Empty device_id / container_id add no restriction.
        """
        clauses = []
        if device_id:
            clauses.append(f'(device_id/href="{device_id}")')
        if container_id:
            clauses.append(f'(container_id="{container_id}")')
        clauses.append(f'(start_time<="{format_time(interval_end)}")')
        clauses.append(
            f'((stop_time=null)or(stop_time>"{format_time(interval_start)}"))'
        )
        return "and".join(clauses)

    async def _get(
        self,
        resource: str,
        cimi_filter: str,
        collection_type: type[CollectionT],
    ) -> CollectionT:
        """GET a CIMI collection and parse it.

        Raises:
            RepositoryUnavailableError: If the server is unreachable or returns
                a non-2xx status
            RepositoryDataError: If the response is not a valid collection
        """
        url = f"{self.base_url}/{resource}"
        params = {"$filter": cimi_filter} if cimi_filter else None
        logger.debug("CIMI GET url=%s filter=%s", url, cimi_filter)

        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(httpx.TransportError),
                stop=stop_after_attempt(self.retry_attempts),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                reraise=True,
            ):
                with attempt:
                    response = await self.client.get(url, params=params)
            response.raise_for_status()

        except httpx.HTTPStatusError as e:
            logger.error(
                "CIMI HTTP error: resource=%s status_code=%s body=%s",
                resource,
                e.response.status_code,
                e.response.text,
            )
            raise RepositoryUnavailableError(
                f"CIMI returned error: {e.response.status_code}"
            ) from e

        except httpx.RequestError as e:
            logger.error("CIMI connection error: resource=%s error=%s", resource, e)
            raise RepositoryUnavailableError(f"Failed to connect to CIMI: {e}") from e

        try:
            return collection_type.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error("Invalid CIMI response: resource=%s error=%s", resource, e)
            raise RepositoryDataError(f"Invalid {resource} collection: {e}") from e


def read_service_instance(path: str | Path) -> ServiceInstance:
    """Read a ServiceInstance from a JSON file in CIMI format.

    Raises:
        OSError: If the file cannot be read
        pydantic.ValidationError: If the document is not a service instance
    """
    content = Path(path).read_text(encoding="utf-8")
    return ServiceInstanceModel.model_validate_json(content).to_entity()
