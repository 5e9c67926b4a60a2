"""Fund Wallet step."""
import logging

from core.application.interfaces import IWalletService
from core.application.workflows.steps._wallets import load_wallet, to_wallet
from core.application.workflows.types import AGENT_CREATION
from core.domain.repositories import AgentWalletRepository
from orchestration.models import ExecutionContext, StepResult
from orchestration.step import StepDescriptor, failure, success


logger = logging.getLogger(__name__)


class FundWalletStep:
    """Sends the initial funds the agent wallet needs to deploy itself."""

    def __init__(
        self,
        wallet_service: IWalletService,
        wallets: AgentWalletRepository,
        *,
        workflow_type: str = AGENT_CREATION,
        priority: int = 3,
    ):
        self.descriptor = StepDescriptor(
            step_id="fund-wallet",
            workflow_type=workflow_type,
            priority=priority,
            name="Fund Wallet",
            description="Funding the wallet with initial ETH",
        )
        self._wallet_service = wallet_service
        self._wallets = wallets

    async def execute(self, context: ExecutionContext) -> StepResult:
        try:
            record = await load_wallet(self._wallets, context)
            if isinstance(record, StepResult):
                return record

            fund_tx_hash = await self._wallet_service.transfer_funds(to_wallet(record))
            record.fund_transaction_hash = fund_tx_hash
            record = await self._wallets.update(record)

            return success(record, {"fund_transaction_hash": fund_tx_hash})
        except Exception as exc:
            logger.error(f"Wallet funding failed: {exc}")
            return failure(f"Failed to fund wallet: {exc}")
