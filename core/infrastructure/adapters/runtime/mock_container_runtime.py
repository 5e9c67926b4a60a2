"""
Mock Container Runtime Implementation.

This simulates a container runtime for testing and demos.
"""
import logging
import uuid
from typing import Dict, List, Optional

from core.application.interfaces import IContainerRuntime
from core.domain.value_objects import ContainerInfo, ContainerSpec


logger = logging.getLogger(__name__)


class MockContainerRuntime(IContainerRuntime):
    """
    Mock implementation of the container runtime.

    Containers are dictionaries; the runtime identity becomes readable after
    ``identity_delay`` probes of a started container (never, if None).
    """

    def __init__(self, identity_delay: Optional[int] = 0, base_port: int = 8080):
        """
        Initialize mock runtime.

        Args:
            identity_delay: Probes that return None before the identity is reported
            base_port: First host port handed out
        """
        self.identity_delay = identity_delay
        self.containers: Dict[str, dict] = {}
        self.started: List[str] = []
        self._next_port = base_port
        logger.info("MockContainerRuntime initialized")

    async def create_container(self, spec: ContainerSpec) -> ContainerInfo:
        container_id = uuid.uuid4().hex[:12]
        port = self._next_port
        self._next_port += 1

        self.containers[container_id] = {
            "spec": spec,
            "port": port,
            "running": False,
            "probes": 0,
            "runtime_agent_id": str(uuid.uuid4()),
        }
        logger.info(f"Created container {container_id} for {spec.name} on port {port}")
        return ContainerInfo(container_id=container_id, port=port)

    async def start_container(self, container_id: str) -> None:
        self._get(container_id)["running"] = True
        self.started.append(container_id)
        logger.info(f"Started container {container_id}")

    async def stop_container(self, container_id: str) -> None:
        self._get(container_id)["running"] = False
        logger.info(f"Stopped container {container_id}")

    async def remove_container(self, container_id: str) -> None:
        self._get(container_id)
        del self.containers[container_id]
        logger.info(f"Removed container {container_id}")

    async def read_runtime_identity(self, container_id: str) -> Optional[str]:
        container = self._get(container_id)
        if not container["running"] or self.identity_delay is None:
            return None

        container["probes"] += 1
        if container["probes"] <= self.identity_delay:
            return None
        return container["runtime_agent_id"]

    def _get(self, container_id: str) -> dict:
        try:
            return self.containers[container_id]
        except KeyError:
            raise KeyError(f"Container {container_id} not found") from None
