"""Deploy Wallet step."""
import logging

from core.application.interfaces import IWalletService
from core.application.workflows.steps._wallets import load_wallet, to_wallet
from core.application.workflows.types import AGENT_CREATION
from core.domain.repositories import AgentWalletRepository
from orchestration.models import ExecutionContext, StepResult
from orchestration.step import StepDescriptor, failure, success


logger = logging.getLogger(__name__)


class DeployWalletStep:
    """Deploys the funded wallet's account contract."""

    def __init__(
        self,
        wallet_service: IWalletService,
        wallets: AgentWalletRepository,
        *,
        workflow_type: str = AGENT_CREATION,
        priority: int = 4,
    ):
        self.descriptor = StepDescriptor(
            step_id="deploy-wallet",
            workflow_type=workflow_type,
            priority=priority,
            name="Deploy Wallet",
            description="Deploying the wallet contract on Starknet",
        )
        self._wallet_service = wallet_service
        self._wallets = wallets

    async def execute(self, context: ExecutionContext) -> StepResult:
        try:
            record = await load_wallet(self._wallets, context)
            if isinstance(record, StepResult):
                return record
            if not record.fund_transaction_hash:
                return failure("Wallet has not been funded")

            deploy_tx_hash, deployed_address = await self._wallet_service.deploy_wallet(
                to_wallet(record)
            )
            record.deploy_transaction_hash = deploy_tx_hash
            record.deployed_address = deployed_address
            record = await self._wallets.update(record)

            return success(
                record,
                {
                    "deploy_transaction_hash": deploy_tx_hash,
                    "deployed_wallet_address": deployed_address,
                },
            )
        except Exception as exc:
            logger.error(f"Wallet deployment failed: {exc}")
            return failure(f"Failed to deploy wallet: {exc}")
