"""Service instance entity module.

A service instance is a logical deployment of a service bound to one
agreement. Its agents are the containers that run it.
"""

from dataclasses import dataclass, field
from enum import Enum


class ServiceType(str, Enum):
    """Service topology tags."""

    COMPSS = "compss"  # distributed master/worker execution model
    DOCKER = "docker"
    DOCKER_COMPOSE = "docker-compose"
    DOCKER_SWARM = "docker-swarm"
    KUBERNETES = "K8s"


@dataclass
class Agent:
    """One sub-component (container) of a service instance.

    Attributes:
        container_id: Identifier of the container running the agent
        is_master: True for the master of a COMPSs service instance
        device_id: Identifier of the device hosting the container
        url: Address of the agent
    """

    container_id: str
    is_master: bool = False
    device_id: str = ""
    url: str = ""


@dataclass
class ServiceInstance:
    """A deployment of a service, associated with one agreement.

    Attributes:
        id: Identifier of the service instance
        agreement: Identifier of the agreement it is bound to
        service: Identifier of the deployed service
        service_type: Topology tag (see ServiceType); free text on the wire
        agents: Containers of the service instance
        status: Deployment status reported by the platform
    """

    id: str
    agreement: str = ""
    service: str = ""
    service_type: str = ""
    agents: list[Agent] = field(default_factory=list)
    status: str = ""

    def __post_init__(self):
        """Validate domain invariants after initialization."""
        if not self.id:
            raise ValueError("ServiceInstance id cannot be empty")

    @property
    def is_compss(self) -> bool:
        """True if the instance uses the distributed master/worker model."""
        return self.service_type == ServiceType.COMPSS.value
