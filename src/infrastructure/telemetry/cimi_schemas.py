"""Pydantic schemas for CIMI telemetry resources.

These models mirror the JSON documents served by a CIMI server and convert
them into domain entities. Unknown fields are ignored.
"""

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from src.domain.entities.service_instance import Agent, ServiceInstance
from src.domain.entities.telemetry import (
    ServiceContainerMetric,
    ServiceOperationReport,
    interval_end,
)


class CimiModel(BaseModel):
    """Base model for CIMI documents."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class HrefModel(CimiModel):
    """Resource link to another CIMI entity."""

    href: str = ""


class ServiceOperationReportModel(CimiModel):
    """service-operation-report resource."""

    id: str = ""
    service_instance: HrefModel = Field(
        default_factory=HrefModel, alias="serviceInstance"
    )
    operation: str = Field(..., description="Operation name")
    execution_time: float = Field(..., description="Execution duration")
    created: AwareDatetime
    updated: AwareDatetime | None = None

    def to_entity(self) -> ServiceOperationReport:
        return ServiceOperationReport(
            id=self.id,
            service_instance=self.service_instance.href,
            operation=self.operation,
            execution_time=self.execution_time,
            created=self.created,
            updated=self.updated,
        )


class AgentModel(CimiModel):
    """Agent entry of a service-instance resource."""

    url: str = ""
    container_id: str = ""
    device_id: str = ""
    status: str = ""
    master_compss: bool = False

    def to_entity(self) -> Agent:
        return Agent(
            container_id=self.container_id,
            is_master=self.master_compss,
            device_id=self.device_id,
            url=self.url,
        )


class ServiceInstanceModel(CimiModel):
    """service-instance resource."""

    id: str
    user: str = ""
    service: str = ""
    agreement: str = ""
    status: str = ""
    service_type: str = ""
    agents: list[AgentModel] | None = None

    def to_entity(self) -> ServiceInstance:
        return ServiceInstance(
            id=self.id,
            agreement=self.agreement,
            service=self.service,
            service_type=self.service_type,
            agents=[a.to_entity() for a in self.agents or []],
            status=self.status,
        )


class ServiceContainerMetricModel(CimiModel):
    """service-container-metric resource."""

    id: str = ""
    device_id: HrefModel = Field(default_factory=HrefModel)
    container_id: str
    start_time: AwareDatetime
    stop_time: AwareDatetime | None = None

    def to_entity(self) -> ServiceContainerMetric:
        return ServiceContainerMetric(
            container_id=self.container_id,
            start_time=self.start_time,
            stop_time=interval_end(self.stop_time),
            device_id=self.device_id.href,
        )


class ServiceOperationReportCollection(CimiModel):
    count: int = 0
    service_operation_reports: list[ServiceOperationReportModel] = Field(
        default_factory=list, alias="serviceOperationReports"
    )


class ServiceInstanceCollection(CimiModel):
    count: int = 0
    service_instances: list[ServiceInstanceModel] = Field(
        default_factory=list, alias="serviceInstances"
    )


class ServiceContainerMetricCollection(CimiModel):
    count: int = 0
    service_container_metrics: list[ServiceContainerMetricModel] = Field(
        default_factory=list, alias="serviceContainerMetrics"
    )
