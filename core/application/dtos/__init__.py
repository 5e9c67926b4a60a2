"""Application DTOs."""

from .agent_dto import AgentCreationDTO, CreateAgentRequest
from .orchestration_dto import (
    CreationStatusDTO,
    OrchestrationDTO,
    StepDescriptorDTO,
    StepHistoryDTO,
    WorkflowDTO,
)

__all__ = [
    "AgentCreationDTO",
    "CreateAgentRequest",
    "CreationStatusDTO",
    "OrchestrationDTO",
    "StepDescriptorDTO",
    "StepHistoryDTO",
    "WorkflowDTO",
]
