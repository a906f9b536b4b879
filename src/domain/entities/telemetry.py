"""Domain value objects for raw telemetry events.

This module defines the records pulled from the telemetry repository:
operation execution reports and container up-intervals. A container interval
may still be open, which is modelled explicitly with IntervalEnd.
"""

from dataclasses import dataclass
from datetime import datetime

from src.domain.entities.timestamps import require_aware


@dataclass(frozen=True)
class Bounded:
    """Interval end at a known time."""

    end: datetime

    def __post_init__(self):
        require_aware(self.end, "Bounded.end")

    def clip(self, upper: datetime) -> datetime:
        return min(self.end, upper)


@dataclass(frozen=True)
class Unbounded:
    """Interval that is still open (container still running)."""

    def clip(self, upper: datetime) -> datetime:
        return upper


UNBOUNDED = Unbounded()

IntervalEnd = Bounded | Unbounded


def interval_end(end: datetime | None) -> IntervalEnd:
    """Build an IntervalEnd from an optional timestamp."""
    if end is None:
        return UNBOUNDED
    return Bounded(end)


@dataclass
class ServiceOperationReport:
    """One execution of a service operation.

    Attributes:
        id: Identifier of the report
        service_instance: Identifier of the service instance that ran the operation
        operation: Operation name
        execution_time: Measured duration of the execution
        created: Creation time of the report
        updated: Last update time of the report
    """

    id: str
    service_instance: str
    operation: str
    execution_time: float
    created: datetime
    updated: datetime | None = None

    def __post_init__(self):
        """Validate domain invariants after initialization."""
        require_aware(self.created, "ServiceOperationReport.created")
        require_aware(self.updated, "ServiceOperationReport.updated")


@dataclass
class ServiceContainerMetric:
    """One observed up-interval of a container.

    Attributes:
        container_id: Identifier of the container
        start_time: Time the container was started
        stop_time: Time the container stopped, or UNBOUNDED if still running
        device_id: Identifier of the device hosting the container
    """

    container_id: str
    start_time: datetime
    stop_time: IntervalEnd = UNBOUNDED
    device_id: str = ""

    def __post_init__(self):
        """Validate domain invariants after initialization."""
        require_aware(self.start_time, "ServiceContainerMetric.start_time")

    @property
    def is_running(self) -> bool:
        return isinstance(self.stop_time, Unbounded)
