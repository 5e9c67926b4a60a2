"""
Transaction Status Enum.

Finality states reported by the chain provider for a transaction.
"""
from enum import Enum


class TransactionStatus(str, Enum):
    """Transaction finality values."""

    PENDING = "PENDING"
    ACCEPTED_ON_L2 = "ACCEPTED_ON_L2"
    ACCEPTED_ON_L1 = "ACCEPTED_ON_L1"
    REJECTED = "REJECTED"

    @property
    def is_accepted(self) -> bool:
        return self in (TransactionStatus.ACCEPTED_ON_L2, TransactionStatus.ACCEPTED_ON_L1)
