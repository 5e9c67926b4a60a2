"""Application layer - services, workflows, interfaces, and DTOs."""

from .dtos import AgentCreationDTO, CreateAgentRequest, CreationStatusDTO
from .interfaces import (
    IBlobStore,
    IChainProvider,
    IContainerRuntime,
    ITokenDeployer,
    IWalletService,
)
from .services import AgentCreationService, InvalidAgentRequest

__all__ = [
    # DTOs
    "AgentCreationDTO",
    "CreateAgentRequest",
    "CreationStatusDTO",
    # Services
    "AgentCreationService",
    "InvalidAgentRequest",
    # Interfaces
    "IBlobStore",
    "IChainProvider",
    "IContainerRuntime",
    "ITokenDeployer",
    "IWalletService",
]
