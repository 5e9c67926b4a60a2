"""
Agent aggregate.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from ..enums.agent_status import AgentStatus


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Agent:
    """
    Provisioned trading agent.

    Created by the first step of an agent creation workflow and enriched by
    the later ones (container, runtime identity).
    """
    name: str
    character_config: Dict[str, Any]
    status: AgentStatus = AgentStatus.STARTING
    id: str = field(default_factory=lambda: str(uuid4()))

    creator_wallet: Optional[str] = None
    curve_side: Optional[str] = None
    deployment_fees_tx_hash: Optional[str] = None
    forked_from_id: Optional[str] = None
    fork_count: int = 0
    profile_picture: Optional[str] = None

    # Runtime
    container_id: Optional[str] = None
    port: Optional[int] = None
    runtime_agent_id: Optional[str] = None

    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def attach_container(self, container_id: str, port: int) -> None:
        """Record the container backing this agent."""
        self.container_id = container_id
        self.port = port
        self.updated_at = _utc_now()

    def mark_running(self, runtime_agent_id: str) -> None:
        """Record the runtime identity reported by the started container."""
        self.runtime_agent_id = runtime_agent_id
        self.status = AgentStatus.RUNNING
        self.updated_at = _utc_now()

    def register_fork(self) -> None:
        self.fork_count += 1
        self.updated_at = _utc_now()


@dataclass
class AgentWallet:
    """On-chain account owned by an agent."""

    agent_id: str
    private_key: str
    public_key: str
    contract_address: str
    ethereum_private_key: Optional[str] = None
    ethereum_account_address: Optional[str] = None
    fund_transaction_hash: Optional[str] = None
    deploy_transaction_hash: Optional[str] = None
    deployed_address: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=_utc_now)


@dataclass
class AgentToken:
    """Token contract deployed for an agent."""

    agent_id: str
    name: str
    symbol: str
    contract_address: str
    buy_tax: int = 0
    sell_tax: int = 0
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=_utc_now)
