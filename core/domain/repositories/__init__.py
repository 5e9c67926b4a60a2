"""Repository interfaces."""

from .agent_repository import AgentRepository, AgentTokenRepository, AgentWalletRepository

__all__ = ["AgentRepository", "AgentTokenRepository", "AgentWalletRepository"]
