"""
Mock Chain Provider Implementation.

Replays scripted transaction statuses for testing and demos.
"""
import logging
from typing import Dict, Iterable, List, Optional

from core.application.interfaces import IChainProvider
from core.domain.enums.transaction_status import TransactionStatus


logger = logging.getLogger(__name__)


class MockChainProvider(IChainProvider):
    """
    Mock implementation of the chain provider.

    Each transaction hash can be given a sequence of statuses; lookups walk
    the sequence and then keep returning its last entry. Unscripted hashes
    report ``default``.
    """

    def __init__(self, default: TransactionStatus = TransactionStatus.ACCEPTED_ON_L2):
        self.default = default
        self._scripts: Dict[str, List[TransactionStatus]] = {}
        self.lookups: List[str] = []
        logger.info(f"MockChainProvider initialized (default: {default.value})")

    def script(self, tx_hash: str, statuses: Iterable[TransactionStatus]) -> None:
        """Set the statuses reported for a transaction, in order."""
        self._scripts[tx_hash] = list(statuses)

    async def get_transaction_status(self, tx_hash: str) -> TransactionStatus:
        self.lookups.append(tx_hash)
        script = self._scripts.get(tx_hash)
        if not script:
            return self.default

        status = script.pop(0) if len(script) > 1 else script[0]
        logger.debug(f"Transaction {tx_hash}: {status.value}")
        return status

    def lookup_count(self, tx_hash: Optional[str] = None) -> int:
        if tx_hash is None:
            return len(self.lookups)
        return self.lookups.count(tx_hash)
