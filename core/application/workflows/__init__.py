"""Workflows registered with the orchestrator."""

from .agent_creation import (
    AgentCreationDependencies,
    build_agent_creation_steps,
    build_leftcurve_steps,
    build_registry,
)
from .types import AGENT_CREATION, LEFTCURVE_AGENT_CREATION

__all__ = [
    "AGENT_CREATION",
    "LEFTCURVE_AGENT_CREATION",
    "AgentCreationDependencies",
    "build_agent_creation_steps",
    "build_leftcurve_steps",
    "build_registry",
]
