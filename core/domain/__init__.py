"""Domain layer - pure domain models and interfaces."""

from .entities import Agent, AgentToken, AgentWallet
from .enums import AgentStatus, OrchestrationStatus, TransactionStatus
from .repositories import AgentRepository, AgentTokenRepository, AgentWalletRepository
from .value_objects import ContainerInfo, ContainerSpec, OrchestrationID, Wallet

__all__ = [
    "Agent",
    "AgentRepository",
    "AgentStatus",
    "AgentToken",
    "AgentTokenRepository",
    "AgentWallet",
    "AgentWalletRepository",
    "ContainerInfo",
    "ContainerSpec",
    "OrchestrationID",
    "OrchestrationStatus",
    "TransactionStatus",
    "Wallet",
]
