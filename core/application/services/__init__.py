"""Application services."""
from .agent_creation_service import (
    AgentCreationService,
    InvalidAgentRequest,
    convert_character_config,
)

__all__ = ["AgentCreationService", "InvalidAgentRequest", "convert_character_config"]
