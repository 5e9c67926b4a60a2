"""Helpers shared by the wallet steps."""
from typing import Union

from core.domain.entities.agent import AgentWallet
from core.domain.repositories import AgentWalletRepository
from core.domain.value_objects import Wallet
from orchestration.models import ExecutionContext, StepResult
from orchestration.step import failure


async def load_wallet(
    wallets: AgentWalletRepository, context: ExecutionContext
) -> Union[AgentWallet, StepResult]:
    """Load the wallet record of the run's agent, or a failure explaining why not."""
    agent_id = context.metadata.get("agent_id")
    if not agent_id:
        return failure("Missing agent_id in orchestration metadata")

    record = await wallets.find_by_agent_id(agent_id)
    if record is None:
        return failure(f"No wallet found for agent {agent_id}")
    return record


def to_wallet(record: AgentWallet) -> Wallet:
    return Wallet(
        private_key=record.private_key,
        public_key=record.public_key,
        contract_address=record.contract_address,
        ethereum_private_key=record.ethereum_private_key,
        ethereum_account_address=record.ethereum_account_address,
    )
