"""Create Container step."""
import logging

from core.application.interfaces import IContainerRuntime
from core.application.workflows.types import AGENT_CREATION
from core.domain.repositories import AgentRepository, AgentWalletRepository
from core.domain.value_objects import ContainerSpec
from orchestration.models import ExecutionContext, StepResult
from orchestration.step import StepDescriptor, failure, success


logger = logging.getLogger(__name__)


class CreateContainerStep:
    """Creates the container that will host the agent runtime."""

    def __init__(
        self,
        runtime: IContainerRuntime,
        agents: AgentRepository,
        wallets: AgentWalletRepository,
        *,
        workflow_type: str = AGENT_CREATION,
        priority: int = 6,
    ):
        self.descriptor = StepDescriptor(
            step_id="create-container",
            workflow_type=workflow_type,
            priority=priority,
            name="Create Docker Container",
            description="Creating Docker container for the agent",
        )
        self._runtime = runtime
        self._agents = agents
        self._wallets = wallets

    async def execute(self, context: ExecutionContext) -> StepResult:
        agent_id = context.metadata.get("agent_id")
        if not agent_id:
            return failure("Missing agent_id in orchestration metadata")

        try:
            agent = await self._agents.find_by_id(agent_id)
            if agent is None:
                return failure(f"Agent {agent_id} not found")

            data = context.data
            agent_config = data.get("agent_config") or data.get("character_config") or agent.character_config
            wallet = await self._wallets.find_by_agent_id(agent_id)

            info = await self._runtime.create_container(
                ContainerSpec(
                    name=data.get("name") or agent.name,
                    agent_config=dict(agent_config),
                    starknet_address=wallet.contract_address if wallet else None,
                    starknet_private_key=wallet.private_key if wallet else None,
                    ethereum_private_key=wallet.ethereum_private_key if wallet else None,
                    ethereum_account_address=wallet.ethereum_account_address if wallet else None,
                )
            )

            agent.attach_container(info.container_id, info.port)
            agent = await self._agents.update(agent)

            return success(agent, {"container_id": info.container_id, "port": info.port})
        except Exception as exc:
            logger.error(f"Container creation failed for agent {agent_id}: {exc}")
            return failure(f"Failed to create container: {exc}")
