"""Mock Token Deployer Implementation."""
import logging
import secrets
from typing import List, Tuple

from core.application.interfaces import ITokenDeployer


logger = logging.getLogger(__name__)


class MockTokenDeployer(ITokenDeployer):
    """Mock implementation of the token deployer; records every deployment."""

    def __init__(self):
        self.deployments: List[Tuple[str, str, str]] = []

    async def deploy_token(self, name: str, symbol: str) -> str:
        address = "0x" + secrets.token_hex(31)
        self.deployments.append((name, symbol, address))
        logger.info(f"Deployed mock token {name} ({symbol}) at {address}")
        return address
