"""Agent creation workflow steps."""

from .create_container import CreateContainerStep
from .create_db_record import CreateDbRecordStep
from .create_wallet import CreateWalletStep
from .deploy_agent_token import DeployAgentTokenStep, create_token_symbol
from .deploy_wallet import DeployWalletStep
from .fund_wallet import FundWalletStep
from .start_container import StartContainerStep

__all__ = [
    "CreateContainerStep",
    "CreateDbRecordStep",
    "CreateWalletStep",
    "DeployAgentTokenStep",
    "DeployWalletStep",
    "FundWalletStep",
    "StartContainerStep",
    "create_token_symbol",
]
