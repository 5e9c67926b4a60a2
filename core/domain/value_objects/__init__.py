"""Domain value objects."""

from .value_objects import ContainerInfo, ContainerSpec, OrchestrationID, Wallet

__all__ = [
    "ContainerInfo",
    "ContainerSpec",
    "OrchestrationID",
    "Wallet",
]
