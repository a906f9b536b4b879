"""Domain entities - Core business objects."""

from src.domain.entities.agreement import (
    CATCH_ALL_GUARANTEE,
    Aggregation,
    Agreement,
    AgreementDetails,
    AgreementState,
    Assessment,
    AssessmentGuarantee,
    Guarantee,
    Party,
    Variable,
)
from src.domain.entities.metric_value import (
    AVAILABILITY,
    EXECUTION_TIME,
    GuaranteeData,
    MetricValue,
)
from src.domain.entities.service_instance import Agent, ServiceInstance, ServiceType
from src.domain.entities.telemetry import (
    UNBOUNDED,
    Bounded,
    IntervalEnd,
    ServiceContainerMetric,
    ServiceOperationReport,
    Unbounded,
    interval_end,
)

__all__ = [
    # Agreement aggregate
    "Agreement",
    "AgreementDetails",
    "AgreementState",
    "Assessment",
    "AssessmentGuarantee",
    "Aggregation",
    "Guarantee",
    "Party",
    "Variable",
    "CATCH_ALL_GUARANTEE",
    # Monitored values
    "MetricValue",
    "GuaranteeData",
    "EXECUTION_TIME",
    "AVAILABILITY",
    # Service instances
    "ServiceInstance",
    "ServiceType",
    "Agent",
    # Raw telemetry
    "ServiceOperationReport",
    "ServiceContainerMetric",
    "IntervalEnd",
    "Bounded",
    "Unbounded",
    "UNBOUNDED",
    "interval_end",
]
