"""Monitoring Adapter.

Turns the raw telemetry of an agreement (operation reports and container
up-intervals) into the per-guarantee value streams consumed by the constraint
evaluator.

Usage:
    adapter = MonitoringAdapter(repository)
    bound = adapter.initialize(agreement)
    data = await bound.get_values(guarantee, ["execution_time"], now)
"""

import logging
import time
from datetime import datetime

from src.domain.entities.agreement import Agreement, Guarantee
from src.domain.entities.metric_value import (
    AVAILABILITY,
    EXECUTION_TIME,
    GuaranteeData,
    MetricValue,
)
from src.domain.entities.telemetry import ServiceContainerMetric
from src.domain.entities.timestamps import require_aware
from src.domain.repositories.telemetry_repository import (
    TelemetryRepositoryError,
    TelemetryRepositoryInterface,
)
from src.domain.services.container_selection import ContainerSelectionPolicy
from src.domain.services.interval_coverage import IntervalCoverageCalculator
from src.domain.services.windowing import WindowingPolicy
from src.infrastructure.observability.metrics import (
    record_availability,
    record_get_values,
    record_repository_error,
    record_samples,
)
from src.infrastructure.observability.tracing import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class AdapterNotInitializedError(Exception):
    """get_values() was called on an adapter not bound to an agreement."""

    pass


class MonitoringAdapter:
    """Monitoring adapter backed by a telemetry repository.

    An adapter is bound to one agreement snapshot with initialize(), which
    returns a new adapter and leaves the receiver untouched. The bound adapter
    lives for one assessment pass and keeps no state between get_values()
    calls; the only history it uses is the agreement's assessment.

    Only one variable per guarantee term is supported: get_values() returns
    the samples of the first requested variable.
    """

    def __init__(
        self,
        repository: TelemetryRepositoryInterface,
        windowing: WindowingPolicy | None = None,
        container_selection: ContainerSelectionPolicy | None = None,
        coverage_calculator: IntervalCoverageCalculator | None = None,
        agreement: Agreement | None = None,
    ):
        """Initialize adapter with dependencies.

        Args:
            repository: Telemetry repository to pull events from
            windowing: Policy computing query lower bounds
            container_selection: Policy selecting containers for availability
            coverage_calculator: Calculator turning up-intervals into availability
            agreement: Agreement the adapter is bound to (use initialize())
        """
        self._repository = repository
        self._windowing = windowing or WindowingPolicy()
        self._container_selection = container_selection or ContainerSelectionPolicy()
        self._coverage_calculator = coverage_calculator or IntervalCoverageCalculator()
        self._agreement = agreement

    @property
    def agreement(self) -> Agreement | None:
        return self._agreement

    def initialize(self, agreement: Agreement) -> "MonitoringAdapter":
        """Bind a new adapter to an agreement snapshot.

        Performs no I/O, so the same repository connection can be reused
        across many agreements.

        Args:
            agreement: Agreement to evaluate

        Returns:
            New adapter sharing this adapter's repository and policies
        """
        return MonitoringAdapter(
            repository=self._repository,
            windowing=self._windowing,
            container_selection=self._container_selection,
            coverage_calculator=self._coverage_calculator,
            agreement=agreement,
        )

    async def get_values(
        self,
        guarantee: Guarantee,
        variable_names: list[str],
        as_of: datetime,
    ) -> GuaranteeData:
        """Get the values of a guarantee term to be evaluated.

        Args:
            guarantee: Guarantee term being evaluated
            variable_names: Variables referenced by the guarantee constraint
            as_of: Evaluation time (upper bound of every query)

        Returns:
            One element per sample of the first variable, keyed by variable
            name. Empty if that variable has no data or could not be retrieved.

        Raises:
            AdapterNotInitializedError: If the adapter is not bound to an agreement
            ValueError: If as_of is a naive datetime
        """
        agreement = self._agreement
        if agreement is None:
            raise AdapterNotInitializedError(
                "MonitoringAdapter.initialize() must be called before get_values()"
            )
        require_aware(as_of, "as_of")

        start_time = time.perf_counter()
        with tracer.start_as_current_span("monitoring_adapter.get_values") as span:
            span.set_attribute("agreement.id", agreement.id)
            span.set_attribute("guarantee.name", guarantee.name)

            default_from = self._windowing.default_from(agreement, guarantee)
            values: dict[str, list[MetricValue]] = {}

            for name in variable_names:
                variable = agreement.details.get_variable(name)
                from_ = self._windowing.compute_from(variable, default_from, as_of)
                logger.debug(
                    f"Retrieving {name} for agreement={agreement.id} "
                    f"guarantee={guarantee.name} from={from_.isoformat()} "
                    f"to={as_of.isoformat()}"
                )
                values[name] = await self._get_variable_values(
                    agreement, guarantee, name, from_, as_of
                )

            result = self._build_guarantee_data(variable_names, values)
            span.set_attribute("samples", len(result))

        record_get_values(time.perf_counter() - start_time)
        logger.info(
            f"Got {len(result)} sample(s) for agreement={agreement.id} "
            f"guarantee={guarantee.name}"
        )
        return result

    async def _get_variable_values(
        self,
        agreement: Agreement,
        guarantee: Guarantee,
        name: str,
        from_: datetime,
        as_of: datetime,
    ) -> list[MetricValue]:
        """Retrieve the samples of one variable.

        A repository error aborts this variable only: it yields no samples.
        """
        try:
            if name == EXECUTION_TIME:
                samples = await self._get_execution_times(agreement, guarantee, from_)
            elif name == AVAILABILITY:
                samples = await self._get_availability(agreement, from_, as_of)
            else:
                logger.warning(
                    f"Unknown variable '{name}' in guarantee {guarantee.name} "
                    f"of agreement {agreement.id}"
                )
                return []
        except TelemetryRepositoryError as e:
            logger.error(
                f"Error retrieving {name} for agreement={agreement.id} "
                f"guarantee={guarantee.name}: {e}",
                exc_info=True,
            )
            record_repository_error(name)
            return []

        record_samples(name, len(samples))
        return samples

    async def _get_execution_times(
        self,
        agreement: Agreement,
        guarantee: Guarantee,
        from_: datetime,
    ) -> list[MetricValue]:
        """One execution_time sample per operation report newer than from_.

        The catch-all guarantee keeps every report; any other guarantee keeps
        the reports of the operation with the same name.
        """
        service_instances = await self._repository.list_service_instances(agreement.id)

        samples: list[MetricValue] = []
        for si in service_instances:
            reports = await self._repository.list_service_operation_reports(si.id, from_)
            for report in reports:
                if guarantee.is_catch_all or report.operation == guarantee.name:
                    samples.append(
                        MetricValue(
                            key=EXECUTION_TIME,
                            value=report.execution_time,
                            datetime=report.created,
                        )
                    )
        return samples

    async def _get_availability(
        self,
        agreement: Agreement,
        from_: datetime,
        as_of: datetime,
    ) -> list[MetricValue]:
        """One availability sample for [from_, as_of], timestamped at as_of.

        Not computed when the window reaches back to the agreement creation,
        as there was no monitoring before it.
        """
        if from_ <= agreement.creation:
            logger.info(
                f"Skipping availability of agreement={agreement.id}: window start "
                f"{from_.isoformat()} is not after creation "
                f"{agreement.creation.isoformat()}"
            )
            return []
        if from_ > as_of:
            logger.warning(
                f"Skipping availability of agreement={agreement.id}: window start "
                f"{from_.isoformat()} is after {as_of.isoformat()}"
            )
            return []

        service_instances = await self._repository.list_service_instances(agreement.id)
        containers: set[str] = set()
        for si in service_instances:
            containers |= self._container_selection.select_containers(si)

        metrics: list[ServiceContainerMetric] = []
        for container_id in sorted(containers):
            metrics.extend(
                await self._repository.list_service_container_metrics(
                    "", container_id, from_, as_of
                )
            )

        availability = self._coverage_calculator.calculate_coverage(metrics, from_, as_of)
        record_availability(availability)
        logger.debug(
            f"Availability of agreement={agreement.id} over {len(containers)} "
            f"container(s): {availability:.2f}%"
        )
        return [MetricValue(key=AVAILABILITY, value=availability, datetime=as_of)]

    @staticmethod
    def _build_guarantee_data(
        variable_names: list[str],
        values: dict[str, list[MetricValue]],
    ) -> GuaranteeData:
        """Convert the samples of the first variable into GuaranteeData."""
        if not variable_names:
            return []

        name = variable_names[0]
        return [{name: sample} for sample in values.get(name, [])]
