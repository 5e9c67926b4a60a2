"""Deploy Agent Token step."""
import logging
import re

from core.application.interfaces import ITokenDeployer
from core.application.workflows.types import AGENT_CREATION
from core.domain.entities.agent import AgentToken
from core.domain.repositories import AgentTokenRepository
from orchestration.models import ExecutionContext, StepResult
from orchestration.step import StepDescriptor, failure, success


logger = logging.getLogger(__name__)


def create_token_symbol(name: str) -> str:
    """
    Derive a 3 to 5 character token symbol from an agent name.

    Non-alphanumerics are dropped and the result upper-cased; short symbols
    are padded with their first letter, long ones truncated.
    """
    symbol = re.sub(r"[^a-zA-Z0-9]", "", name).upper()
    if not symbol:
        raise ValueError(f"Cannot derive a token symbol from {name!r}")
    if len(symbol) < 3:
        symbol = symbol.ljust(3, symbol[0])
    return symbol[:5]


class DeployAgentTokenStep:
    """Deploys the agent's token contract and records it."""

    def __init__(
        self,
        token_deployer: ITokenDeployer,
        tokens: AgentTokenRepository,
        *,
        workflow_type: str = AGENT_CREATION,
        priority: int = 5,
    ):
        self.descriptor = StepDescriptor(
            step_id="deploy-agent-token",
            workflow_type=workflow_type,
            priority=priority,
            name="Deploy Agent Token",
            description="Deploying the agent token contract on Starknet",
        )
        self._token_deployer = token_deployer
        self._tokens = tokens

    async def execute(self, context: ExecutionContext) -> StepResult:
        agent_id = context.metadata.get("agent_id")
        if not agent_id:
            return failure("Missing agent_id in orchestration metadata")

        try:
            name = context.data["name"]
            symbol = create_token_symbol(name)
            token_name = f"{name.upper()} Token"

            contract_address = await self._token_deployer.deploy_token(token_name, symbol)
            token = await self._tokens.create(
                AgentToken(
                    agent_id=agent_id,
                    name=token_name,
                    symbol=symbol,
                    contract_address=contract_address,
                )
            )
            logger.info(f"Token {symbol} deployed at {contract_address} for agent {agent_id}")

            return success(token, {"token_address": contract_address, "token_symbol": symbol})
        except Exception as exc:
            logger.error(f"Token deployment failed: {exc}")
            return failure(f"Failed to deploy token: {exc}")
