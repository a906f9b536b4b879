"""Container selection policy for availability.

Decides which containers of a service instance count towards the
availability of the agreement it is bound to.
"""

from src.domain.entities.service_instance import ServiceInstance


class ContainerSelectionPolicy:
    """Selects the containers whose uptime is relevant to an agreement.

    Rules:
    - COMPSs (master/worker) instances: only the master's container counts
    - Any other topology: every agent's container counts
    """

    def select_containers(self, service_instance: ServiceInstance) -> set[str]:
        """Return the container ids relevant to the service instance availability.

        Args:
            service_instance: Service instance with its agents

        Returns:
            Set of container ids (agents without a container id are skipped)
        """
        if service_instance.is_compss:
            agents = [a for a in service_instance.agents if a.is_master]
        else:
            agents = service_instance.agents

        return {a.container_id for a in agents if a.container_id}
