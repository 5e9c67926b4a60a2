"""Fixtures for agent creation workflow tests."""

import pytest
import pytest_asyncio

from core.domain.entities.agent import Agent, AgentWallet
from core.infrastructure.adapters.chain import MockChainProvider
from core.infrastructure.adapters.persistence import (
    MockAgentRepository,
    MockAgentTokenRepository,
    MockAgentWalletRepository,
)
from core.infrastructure.adapters.runtime import MockContainerRuntime
from core.infrastructure.adapters.storage import LocalBlobStore
from core.infrastructure.adapters.wallet import MockTokenDeployer, MockWalletService
from orchestration.models import ExecutionContext


class SleepRecorder:
    def __init__(self) -> None:
        self.calls: list = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def agents() -> MockAgentRepository:
    return MockAgentRepository()


@pytest.fixture
def wallets() -> MockAgentWalletRepository:
    return MockAgentWalletRepository()


@pytest.fixture
def tokens() -> MockAgentTokenRepository:
    return MockAgentTokenRepository()


@pytest.fixture
def chain() -> MockChainProvider:
    return MockChainProvider()


@pytest.fixture
def runtime() -> MockContainerRuntime:
    return MockContainerRuntime()


@pytest.fixture
def wallet_service() -> MockWalletService:
    return MockWalletService()


@pytest.fixture
def token_deployer() -> MockTokenDeployer:
    return MockTokenDeployer()


@pytest.fixture
def blob_store(tmp_path) -> LocalBlobStore:
    return LocalBlobStore(tmp_path / "uploads")


@pytest.fixture
def fake_sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_context():
    """Build an ExecutionContext with input data and pre-merged metadata."""

    def _make(data=None, **metadata) -> ExecutionContext:
        context = ExecutionContext("orch-1", "agent-creation", data or {})
        context.merge(metadata)
        return context

    return _make


@pytest_asyncio.fixture
async def stored_agent(agents) -> Agent:
    return await agents.create(
        Agent(name="Trader Bot", character_config={"name": "Trader Bot", "bio": ["hi"]})
    )


@pytest_asyncio.fixture
async def stored_wallet(wallets, stored_agent, wallet_service) -> AgentWallet:
    wallet = wallet_service.create_wallet()
    return await wallets.create(
        AgentWallet(
            agent_id=stored_agent.id,
            private_key=wallet.private_key,
            public_key=wallet.public_key,
            contract_address=wallet.contract_address,
            ethereum_private_key=wallet.ethereum_private_key,
            ethereum_account_address=wallet.ethereum_account_address,
        )
    )
