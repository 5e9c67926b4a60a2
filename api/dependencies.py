"""
FastAPI Dependencies.

Provides dependency injection for the orchestrator, its collaborators and
the agent creation service.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.application.interfaces import (
    IBlobStore,
    IChainProvider,
    IContainerRuntime,
    ITokenDeployer,
    IWalletService,
)
from core.application.services import AgentCreationService
from core.application.workflows import AgentCreationDependencies, build_registry
from core.domain.repositories import (
    AgentRepository,
    AgentTokenRepository,
    AgentWalletRepository,
)
from core.infrastructure.adapters.chain import MockChainProvider
from core.infrastructure.adapters.persistence import (
    MockAgentRepository,
    MockAgentTokenRepository,
    MockAgentWalletRepository,
)
from core.infrastructure.adapters.runtime import MockContainerRuntime
from core.infrastructure.adapters.storage import LocalBlobStore
from core.infrastructure.adapters.wallet import MockTokenDeployer, MockWalletService
from core.settings import get_app_settings
from orchestration import InMemoryEventBus, InMemoryStatusStore, Orchestrator, StatusStore
from orchestration.events import ORCHESTRATION_COMPLETED, ORCHESTRATION_FAILED, Event

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_agent_repository: Optional[AgentRepository] = None
_wallet_repository: Optional[AgentWalletRepository] = None
_token_repository: Optional[AgentTokenRepository] = None
_chain_provider: Optional[IChainProvider] = None
_container_runtime: Optional[IContainerRuntime] = None
_wallet_service: Optional[IWalletService] = None
_token_deployer: Optional[ITokenDeployer] = None
_blob_store: Optional[IBlobStore] = None
_status_store: Optional[StatusStore] = None
_event_bus: Optional[InMemoryEventBus] = None
_orchestrator: Optional[Orchestrator] = None
_agent_creation_service: Optional[AgentCreationService] = None


# =============================================================================
# REPOSITORIES
# =============================================================================

def get_agent_repository() -> AgentRepository:
    global _agent_repository
    if _agent_repository is None:
        _agent_repository = MockAgentRepository()
        logger.info("Created MockAgentRepository instance")
    return _agent_repository


def get_wallet_repository() -> AgentWalletRepository:
    global _wallet_repository
    if _wallet_repository is None:
        _wallet_repository = MockAgentWalletRepository()
    return _wallet_repository


def get_token_repository() -> AgentTokenRepository:
    global _token_repository
    if _token_repository is None:
        _token_repository = MockAgentTokenRepository()
    return _token_repository


# =============================================================================
# COLLABORATORS
# =============================================================================

def get_chain_provider() -> IChainProvider:
    global _chain_provider

    if _chain_provider is None:
        settings = get_app_settings()

        if settings.starknet.use_mock:
            _chain_provider = MockChainProvider()
            logger.info("Using MockChainProvider (STARKNET_USE_MOCK enabled)")
        else:
            from core.infrastructure.adapters.chain.starknet_chain_provider import StarknetChainProvider
            _chain_provider = StarknetChainProvider(settings.starknet)
            logger.info("Created StarknetChainProvider instance")

    return _chain_provider


def get_container_runtime() -> IContainerRuntime:
    global _container_runtime
    if _container_runtime is None:
        _container_runtime = MockContainerRuntime()
        logger.info("Created MockContainerRuntime instance")
    return _container_runtime


def get_wallet_service() -> IWalletService:
    global _wallet_service
    if _wallet_service is None:
        _wallet_service = MockWalletService()
    return _wallet_service


def get_token_deployer() -> ITokenDeployer:
    global _token_deployer
    if _token_deployer is None:
        _token_deployer = MockTokenDeployer()
    return _token_deployer


def get_blob_store() -> IBlobStore:
    global _blob_store
    if _blob_store is None:
        _blob_store = LocalBlobStore(get_app_settings().service.upload_dir)
    return _blob_store


# =============================================================================
# ORCHESTRATION
# =============================================================================

def get_status_store() -> StatusStore:
    global _status_store

    if _status_store is None:
        settings = get_app_settings()

        if settings.orchestration.store_backend == "database":
            from core.infrastructure.database.config import get_session_factory
            from core.infrastructure.database.status_store import SqlAlchemyStatusStore

            _status_store = SqlAlchemyStatusStore(get_session_factory(settings.database))
            logger.info("Created SqlAlchemyStatusStore instance")
        else:
            _status_store = InMemoryStatusStore()
            logger.info("Using InMemoryStatusStore")

    return _status_store


async def log_lifecycle_event(event: Event) -> None:
    """Log orchestration lifecycle events; terminal ones at INFO."""
    level = logging.INFO if event.name in (ORCHESTRATION_COMPLETED, ORCHESTRATION_FAILED) else logging.DEBUG
    logger.log(
        level,
        f"{event.name} [{event.metadata.orchestration_id}] "
        f"{event.metadata.workflow_type} {event.payload}",
    )


def get_event_bus() -> InMemoryEventBus:
    global _event_bus
    if _event_bus is None:
        _event_bus = InMemoryEventBus()
        _event_bus.subscribe("orchestration.*", log_lifecycle_event)
    return _event_bus


def get_orchestrator() -> Orchestrator:
    global _orchestrator

    if _orchestrator is None:
        settings = get_app_settings().orchestration

        registry = build_registry(
            AgentCreationDependencies(
                agents=get_agent_repository(),
                wallets=get_wallet_repository(),
                tokens=get_token_repository(),
                chain=get_chain_provider(),
                runtime=get_container_runtime(),
                wallet_service=get_wallet_service(),
                token_deployer=get_token_deployer(),
                blob_store=get_blob_store(),
                payment_poll_policy=settings.payment_poll_policy(),
                runtime_poll_policy=settings.runtime_poll_policy(),
            )
        )
        _orchestrator = Orchestrator(
            registry=registry,
            store=get_status_store(),
            event_bus=get_event_bus(),
            max_concurrent_runs=settings.max_concurrent_runs,
        )
        logger.info(f"Created Orchestrator ({', '.join(registry.workflow_types())})")

    return _orchestrator


def get_agent_creation_service() -> AgentCreationService:
    global _agent_creation_service

    if _agent_creation_service is None:
        _agent_creation_service = AgentCreationService(
            orchestrator=get_orchestrator(),
            blob_store=get_blob_store(),
            workflow_type=get_app_settings().service.agent_creation_workflow,
        )
        logger.info("Created AgentCreationService instance")

    return _agent_creation_service


def peek_orchestrator() -> Optional[Orchestrator]:
    """Return the orchestrator if one was created, without creating it."""
    return _orchestrator


# =============================================================================
# RESET (for testing)
# =============================================================================

def reset_dependencies():
    global _agent_repository, _wallet_repository, _token_repository
    global _chain_provider, _container_runtime, _wallet_service, _token_deployer, _blob_store
    global _status_store, _event_bus, _orchestrator, _agent_creation_service

    _agent_repository = None
    _wallet_repository = None
    _token_repository = None
    _chain_provider = None
    _container_runtime = None
    _wallet_service = None
    _token_deployer = None
    _blob_store = None
    _status_store = None
    _event_bus = None
    _orchestrator = None
    _agent_creation_service = None

    get_app_settings.cache_clear()
    logger.info("Dependencies reset")
