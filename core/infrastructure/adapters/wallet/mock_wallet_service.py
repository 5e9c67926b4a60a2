"""
Mock Wallet Service Implementation.

Generates random key material and fake transaction hashes for testing and demos.
"""
import logging
import secrets
from typing import List, Tuple

from core.application.interfaces import IWalletService
from core.domain.value_objects import Wallet


logger = logging.getLogger(__name__)


def _felt() -> str:
    return "0x" + secrets.token_hex(31)


class MockWalletService(IWalletService):
    """Mock implementation of the wallet service."""

    def __init__(self):
        self.funded: List[str] = []
        self.deployed: List[str] = []
        logger.info("MockWalletService initialized")

    def create_wallet(self) -> Wallet:
        wallet = Wallet(
            private_key=_felt(),
            public_key=_felt(),
            contract_address=_felt(),
            ethereum_private_key="0x" + secrets.token_hex(32),
            ethereum_account_address="0x" + secrets.token_hex(20),
        )
        logger.info(f"Created mock wallet {wallet.contract_address}")
        return wallet

    async def transfer_funds(self, wallet: Wallet) -> str:
        self.funded.append(wallet.contract_address)
        tx_hash = _felt()
        logger.info(f"Funded {wallet.contract_address} (tx {tx_hash})")
        return tx_hash

    async def deploy_wallet(self, wallet: Wallet) -> Tuple[str, str]:
        self.deployed.append(wallet.contract_address)
        tx_hash = _felt()
        logger.info(f"Deployed account {wallet.contract_address} (tx {tx_hash})")
        return tx_hash, wallet.contract_address
