"""
Mock Agent Repository Implementations.

In-memory implementations for testing and demos. Entities are copied on the
way in and out, so only ``create``/``update`` change what is stored.
"""
import copy
import logging
from typing import Dict, List, Optional

from core.domain.entities.agent import Agent, AgentToken, AgentWallet
from core.domain.repositories import (
    AgentRepository,
    AgentTokenRepository,
    AgentWalletRepository,
)


logger = logging.getLogger(__name__)


class MockAgentRepository(AgentRepository):
    """In-memory implementation of AgentRepository."""

    def __init__(self):
        """Initialize empty storage."""
        self._storage: Dict[str, Agent] = {}
        logger.info("MockAgentRepository initialized (in-memory storage)")

    async def create(self, agent: Agent) -> Agent:
        if agent.id in self._storage:
            raise ValueError(f"Agent {agent.id} already exists")
        self._storage[agent.id] = copy.deepcopy(agent)
        logger.info(f"Agent saved to mock repository: {agent.id} ({agent.name})")
        return copy.deepcopy(agent)

    async def update(self, agent: Agent) -> Agent:
        if agent.id not in self._storage:
            raise KeyError(f"Agent {agent.id} not found")
        self._storage[agent.id] = copy.deepcopy(agent)
        logger.debug(f"Agent updated in mock repository: {agent.id} (status: {agent.status.value})")
        return copy.deepcopy(agent)

    async def find_by_id(self, agent_id: str) -> Optional[Agent]:
        agent = self._storage.get(agent_id)
        if agent is None:
            logger.info(f"Agent not found in mock repository: {agent_id}")
            return None
        return copy.deepcopy(agent)

    async def find_by_transaction_hash(
        self, transaction_hash: str, creator_wallet: Optional[str] = None
    ) -> Optional[Agent]:
        matches = [
            agent
            for agent in self._storage.values()
            if agent.deployment_fees_tx_hash == transaction_hash
            and (creator_wallet is None or agent.creator_wallet == creator_wallet)
        ]
        if not matches:
            return None
        return copy.deepcopy(max(matches, key=lambda agent: agent.created_at))

    async def find_all(self, limit: int = 100) -> List[Agent]:
        agents = sorted(self._storage.values(), key=lambda agent: agent.created_at, reverse=True)
        return [copy.deepcopy(agent) for agent in agents[:limit]]

    def clear(self) -> None:
        """Clear all agents (for testing)."""
        self._storage.clear()


class MockAgentWalletRepository(AgentWalletRepository):
    """In-memory implementation of AgentWalletRepository, keyed by agent id."""

    def __init__(self):
        self._storage: Dict[str, AgentWallet] = {}

    async def create(self, wallet: AgentWallet) -> AgentWallet:
        if wallet.agent_id in self._storage:
            raise ValueError(f"Agent {wallet.agent_id} already has a wallet")
        self._storage[wallet.agent_id] = copy.deepcopy(wallet)
        logger.info(f"Wallet {wallet.contract_address} stored for agent {wallet.agent_id}")
        return copy.deepcopy(wallet)

    async def update(self, wallet: AgentWallet) -> AgentWallet:
        if wallet.agent_id not in self._storage:
            raise KeyError(f"No wallet stored for agent {wallet.agent_id}")
        self._storage[wallet.agent_id] = copy.deepcopy(wallet)
        return copy.deepcopy(wallet)

    async def find_by_agent_id(self, agent_id: str) -> Optional[AgentWallet]:
        wallet = self._storage.get(agent_id)
        return copy.deepcopy(wallet) if wallet else None


class MockAgentTokenRepository(AgentTokenRepository):
    """In-memory implementation of AgentTokenRepository, keyed by agent id."""

    def __init__(self):
        self._storage: Dict[str, AgentToken] = {}

    async def create(self, token: AgentToken) -> AgentToken:
        if token.agent_id in self._storage:
            raise ValueError(f"Agent {token.agent_id} already has a token")
        self._storage[token.agent_id] = copy.deepcopy(token)
        logger.info(f"Token {token.symbol} stored for agent {token.agent_id}")
        return copy.deepcopy(token)

    async def find_by_agent_id(self, agent_id: str) -> Optional[AgentToken]:
        token = self._storage.get(agent_id)
        return copy.deepcopy(token) if token else None
