"""In-memory persistence adapters."""

from .mock_agent_repository import (
    MockAgentRepository,
    MockAgentTokenRepository,
    MockAgentWalletRepository,
)

__all__ = ["MockAgentRepository", "MockAgentTokenRepository", "MockAgentWalletRepository"]
