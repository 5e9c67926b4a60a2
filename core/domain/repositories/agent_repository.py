"""Repository interfaces for the Agent aggregate and its on-chain records."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.agent import Agent, AgentToken, AgentWallet


class AgentRepository(ABC):
    """Abstract repository for Agent persistence."""

    @abstractmethod
    async def create(self, agent: Agent) -> Agent:
        """Persist a new agent.

        Args:
            agent: Agent to persist

        Returns:
            The stored agent
        """
        pass

    @abstractmethod
    async def update(self, agent: Agent) -> Agent:
        """Persist changes to an existing agent.

        Args:
            agent: Agent with updated fields

        Returns:
            The stored agent

        Raises:
            KeyError: If the agent does not exist
        """
        pass

    @abstractmethod
    async def find_by_id(self, agent_id: str) -> Optional[Agent]:
        """Retrieve an agent by id.

        Args:
            agent_id: Agent identifier

        Returns:
            Agent if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_transaction_hash(
        self, transaction_hash: str, creator_wallet: Optional[str] = None
    ) -> Optional[Agent]:
        """Find the most recent agent paid for by a deployment transaction.

        Args:
            transaction_hash: Deployment fee transaction hash
            creator_wallet: Optional creator wallet filter

        Returns:
            Agent if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, limit: int = 100) -> List[Agent]:
        """List agents, newest first."""
        pass


class AgentWalletRepository(ABC):
    """Abstract repository for agent wallets."""

    @abstractmethod
    async def create(self, wallet: AgentWallet) -> AgentWallet:
        pass

    @abstractmethod
    async def update(self, wallet: AgentWallet) -> AgentWallet:
        pass

    @abstractmethod
    async def find_by_agent_id(self, agent_id: str) -> Optional[AgentWallet]:
        pass


class AgentTokenRepository(ABC):
    """Abstract repository for agent tokens."""

    @abstractmethod
    async def create(self, token: AgentToken) -> AgentToken:
        pass

    @abstractmethod
    async def find_by_agent_id(self, agent_id: str) -> Optional[AgentToken]:
        pass
