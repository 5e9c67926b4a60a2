"""Application DTOs for agent creation."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class CreateAgentRequest(BaseModel):
    """Request DTO for creating an agent."""

    name: str = Field(..., min_length=1, description="Name of the agent")
    transaction_hash: str = Field(..., min_length=1, description="Deployment fees transaction hash")
    creator_wallet: Optional[str] = Field(None, description="Wallet address of the creator")
    curve_side: Optional[str] = Field(None, description="Side of the curve (LEFT or RIGHT)")
    forked_from_id: Optional[str] = Field(None, description="ID of the agent to fork from")
    character_config: Optional[Dict[str, Any]] = Field(None, description="Legacy character configuration")
    agent_config: Optional[Dict[str, Any]] = Field(None, description="Agent configuration")

    model_config = {"frozen": True}


class AgentCreationDTO(BaseModel):
    """Response DTO returned once a creation workflow has been started."""

    orchestration_id: str = Field(..., description="Orchestration ID to poll")
    message: str = Field(default="Agent creation initiated successfully")

    model_config = {"frozen": True}
