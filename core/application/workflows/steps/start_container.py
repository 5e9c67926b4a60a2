"""Start Container step."""
import asyncio
import logging
from typing import Optional

from core.application.interfaces import IContainerRuntime
from core.application.workflows.types import AGENT_CREATION
from core.domain.repositories import AgentRepository
from orchestration.models import ExecutionContext, StepResult
from orchestration.polling import PollPolicy, Sleep, poll_until
from orchestration.step import StepDescriptor, failure, success


logger = logging.getLogger(__name__)


class StartContainerStep:
    """
    Starts the agent container and waits for the runtime to report its id.

    The wait is bounded by ``poll_policy`` (default 5s x 60 attempts).
    """

    def __init__(
        self,
        runtime: IContainerRuntime,
        agents: AgentRepository,
        *,
        poll_policy: Optional[PollPolicy] = None,
        sleep: Sleep = asyncio.sleep,
        workflow_type: str = AGENT_CREATION,
        priority: int = 7,
    ):
        self.descriptor = StepDescriptor(
            step_id="start-container",
            workflow_type=workflow_type,
            priority=priority,
            name="Start Container",
            description="Starting the Docker container and getting runtime ID",
        )
        self._runtime = runtime
        self._agents = agents
        self._poll_policy = poll_policy or PollPolicy()
        self._sleep = sleep

    async def execute(self, context: ExecutionContext) -> StepResult:
        container_id = context.metadata.get("container_id")
        agent_id = context.metadata.get("agent_id")
        if not container_id:
            return failure("Missing container_id in orchestration metadata")
        if not agent_id:
            return failure("Missing agent_id in orchestration metadata")

        try:
            await self._runtime.start_container(container_id)

            runtime_agent_id = await poll_until(
                lambda: self._runtime.read_runtime_identity(container_id),
                self._poll_policy,
                sleep=self._sleep,
                cancellation=context.cancellation,
                description=f"runtime identity of container {container_id}",
            )
            if not runtime_agent_id:
                return failure("Could not retrieve runtime agent ID")

            agent = await self._agents.find_by_id(agent_id)
            if agent is None:
                return failure(f"Agent {agent_id} not found")

            agent.mark_running(runtime_agent_id)
            agent = await self._agents.update(agent)
            logger.info(f"Agent {agent_id} running as {runtime_agent_id}")

            return success(
                agent,
                {
                    "runtime_agent_id": runtime_agent_id,
                    "agent": {"id": agent.id, "name": agent.name},
                },
            )
        except Exception as exc:
            logger.error(f"Container start failed for {container_id}: {exc}")
            return failure(f"Failed to start container: {exc}")
