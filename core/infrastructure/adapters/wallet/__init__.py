"""Wallet and token adapters."""

from .mock_token_deployer import MockTokenDeployer
from .mock_wallet_service import MockWalletService

__all__ = ["MockTokenDeployer", "MockWalletService"]
