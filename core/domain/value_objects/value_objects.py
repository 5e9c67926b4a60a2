"""Domain value objects - pure Python immutable types."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from uuid import UUID, uuid4


@dataclass(frozen=True)
class OrchestrationID:
    """Unique identifier for an orchestration run."""

    value: UUID

    @classmethod
    def generate(cls) -> "OrchestrationID":
        """Generate a new OrchestrationID."""
        return cls(value=uuid4())

    @classmethod
    def parse(cls, raw: str) -> "OrchestrationID":
        """Parse an OrchestrationID from its string form.

        Raises:
            ValueError: If ``raw`` is not a valid UUID
        """
        return cls(value=UUID(raw))

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)


@dataclass(frozen=True)
class Wallet:
    """
    Freshly generated agent wallet.

    Holds key material, so it is never placed into orchestration metadata;
    steps pass the contract address around and reload the wallet record.
    """
    private_key: str
    public_key: str
    contract_address: str
    ethereum_private_key: Optional[str] = None
    ethereum_account_address: Optional[str] = None


@dataclass(frozen=True)
class ContainerSpec:
    """Everything the container runtime needs to create an agent container."""

    name: str
    agent_config: Dict[str, Any] = field(default_factory=dict)
    starknet_address: Optional[str] = None
    starknet_private_key: Optional[str] = None
    ethereum_private_key: Optional[str] = None
    ethereum_account_address: Optional[str] = None


@dataclass(frozen=True)
class ContainerInfo:
    """Identity of a created container."""

    container_id: str
    port: int
