"""Create Wallet step."""
import logging

from core.application.interfaces import IWalletService
from core.application.workflows.types import AGENT_CREATION
from core.domain.entities.agent import AgentWallet
from core.domain.repositories import AgentWalletRepository
from orchestration.models import ExecutionContext, StepResult
from orchestration.step import StepDescriptor, failure, success


logger = logging.getLogger(__name__)


class CreateWalletStep:
    """Generates the agent's wallet and stores it against the agent."""

    def __init__(
        self,
        wallet_service: IWalletService,
        wallets: AgentWalletRepository,
        *,
        workflow_type: str = AGENT_CREATION,
        priority: int = 2,
    ):
        self.descriptor = StepDescriptor(
            step_id="create-wallet",
            workflow_type=workflow_type,
            priority=priority,
            name="Create Starknet Wallet",
            description="Creating a new Starknet wallet for the agent",
        )
        self._wallet_service = wallet_service
        self._wallets = wallets

    async def execute(self, context: ExecutionContext) -> StepResult:
        agent_id = context.metadata.get("agent_id")
        if not agent_id:
            return failure("Missing agent_id in orchestration metadata")

        try:
            wallet = self._wallet_service.create_wallet()
            record = await self._wallets.create(
                AgentWallet(
                    agent_id=agent_id,
                    private_key=wallet.private_key,
                    public_key=wallet.public_key,
                    contract_address=wallet.contract_address,
                    ethereum_private_key=wallet.ethereum_private_key,
                    ethereum_account_address=wallet.ethereum_account_address,
                )
            )
            return success(record, {"wallet_address": record.contract_address})
        except Exception as exc:
            logger.error(f"Wallet creation failed for agent {agent_id}: {exc}")
            return failure(f"Failed to create wallet: {exc}")
