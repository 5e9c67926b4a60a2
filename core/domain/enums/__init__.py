"""Domain enums."""

from .agent_status import AgentStatus
from .orchestration_status import OrchestrationStatus
from .transaction_status import TransactionStatus

__all__ = ["AgentStatus", "OrchestrationStatus", "TransactionStatus"]
