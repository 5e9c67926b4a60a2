"""
Create Database Record step.

Verifies the deployment payment on chain and creates the agent record.
"""
import asyncio
import logging
from typing import Any, Mapping, Optional

from core.application.interfaces import IBlobStore, IChainProvider
from core.application.workflows.types import AGENT_CREATION
from core.domain.entities.agent import Agent
from core.domain.enums.transaction_status import TransactionStatus
from core.domain.repositories import AgentRepository
from orchestration.models import ExecutionContext, StepResult
from orchestration.polling import PollPolicy, Sleep, poll_until
from orchestration.step import StepDescriptor, failure, success


logger = logging.getLogger(__name__)


class CreateDbRecordStep:
    """
    First step of agent creation.

    - Rejects input without a payment transaction hash or agent config
    - Resolves the source agent when forking (and bumps its fork count)
    - Waits, bounded, for the payment transaction to be accepted
    - Creates the agent in STARTING state and files its profile picture
    """

    def __init__(
        self,
        agents: AgentRepository,
        chain: IChainProvider,
        blob_store: Optional[IBlobStore] = None,
        *,
        poll_policy: Optional[PollPolicy] = None,
        sleep: Sleep = asyncio.sleep,
        workflow_type: str = AGENT_CREATION,
        priority: int = 1,
    ):
        self.descriptor = StepDescriptor(
            step_id="create-db-record",
            workflow_type=workflow_type,
            priority=priority,
            name="Create Database Record",
            description="Creating initial database record for the agent",
        )
        self._agents = agents
        self._chain = chain
        self._blob_store = blob_store
        self._poll_policy = poll_policy or PollPolicy()
        self._sleep = sleep

    async def execute(self, context: ExecutionContext) -> StepResult:
        data = context.data
        try:
            transaction_hash = data.get("transaction_hash")
            if not transaction_hash:
                return failure("Missing transaction hash for deployment payment")

            name = data.get("name")
            if not name:
                return failure("Missing agent name")

            config = data.get("character_config") or data.get("agent_config")

            forked_from_id = data.get("forked_from_id")
            if forked_from_id:
                source = await self._agents.find_by_id(forked_from_id)
                if source is None:
                    return failure(f"Source agent with ID {forked_from_id} not found")

                if not config:
                    config = source.character_config
                    logger.info(f"Using configuration of source agent {forked_from_id}")

                await self._register_fork(source)

            if not config:
                return failure(
                    "Missing agent configuration (character_config or agent_config required)"
                )

            status = await self._wait_for_payment(transaction_hash, context)
            if status is None:
                return failure("Transaction not confirmed on L2 after maximum attempts")
            if status == TransactionStatus.REJECTED:
                return failure("Deployment payment transaction was rejected")

            agent = await self._agents.create(
                Agent(
                    name=name,
                    character_config=dict(config),
                    creator_wallet=data.get("creator_wallet"),
                    curve_side=data.get("curve_side"),
                    deployment_fees_tx_hash=transaction_hash,
                    forked_from_id=forked_from_id,
                )
            )
            logger.info(f"Agent {agent.id} created (payment tx {transaction_hash})")

            await self._attach_profile_picture(agent, data)

            return success(agent, {"agent_id": agent.id})

        except Exception as exc:
            logger.error(f"Agent record creation failed: {exc}", exc_info=True)
            return failure(f"Failed to create agent record: {exc}")

    async def _register_fork(self, source: Agent) -> None:
        try:
            source.register_fork()
            await self._agents.update(source)
        except Exception as exc:
            logger.warning(f"Failed to increment fork count of {source.id}: {exc}")

    async def _wait_for_payment(
        self, transaction_hash: str, context: ExecutionContext
    ) -> Optional[TransactionStatus]:
        async def probe() -> Optional[TransactionStatus]:
            status = await self._chain.get_transaction_status(transaction_hash)
            if status.is_accepted or status == TransactionStatus.REJECTED:
                return status
            return None

        return await poll_until(
            probe,
            self._poll_policy,
            sleep=self._sleep,
            cancellation=context.cancellation,
            description=f"transaction {transaction_hash}",
        )

    async def _attach_profile_picture(self, agent: Agent, data: Mapping[str, Any]) -> None:
        picture = data.get("profile_picture")
        if not picture or not picture.startswith("temp_") or self._blob_store is None:
            return

        try:
            agent.profile_picture = await self._blob_store.move_to_final(picture, agent.id)
            await self._agents.update(agent)
        except Exception as exc:
            logger.error(f"Failed to move profile picture {picture} for agent {agent.id}: {exc}")
