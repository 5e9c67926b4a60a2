"""
Agent Status Enum.

Lifecycle states of a provisioned agent.
"""
from enum import Enum


class AgentStatus(str, Enum):
    """Agent status values."""

    STARTING = "starting"
    RUNNING = "running"
    STOPPED = "stopped"
    FAILED = "failed"
