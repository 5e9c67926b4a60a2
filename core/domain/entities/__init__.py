"""Domain entities."""

from .agent import Agent, AgentToken, AgentWallet

__all__ = ["Agent", "AgentToken", "AgentWallet"]
