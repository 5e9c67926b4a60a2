"""Application DTOs for orchestration status."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from orchestration.models import OrchestrationRecord
from orchestration.step import StepDescriptor


class CreationStatusDTO(BaseModel):
    """Progress of an agent creation workflow, as polled by clients."""

    orchestration_status: str = Field(..., description="pending, running, completed or failed")
    progress: int = Field(..., ge=0, le=100)
    current_step_id: Optional[str] = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def from_record(cls, record: OrchestrationRecord) -> "CreationStatusDTO":
        return cls(
            orchestration_status=record.status.value,
            progress=record.progress,
            current_step_id=record.current_step_id,
            result=record.result,
            error=record.error,
        )


class StepHistoryDTO(BaseModel):
    step_id: str
    success: bool
    error: Optional[str] = None
    started_at: datetime
    finished_at: datetime
    duration_ms: int


class OrchestrationDTO(BaseModel):
    """Full orchestration record."""

    orchestration_id: str
    workflow_type: str
    status: str
    progress: int
    current_step_id: Optional[str] = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    step_history: List[StepHistoryDTO] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: OrchestrationRecord) -> "OrchestrationDTO":
        return cls(
            orchestration_id=record.orchestration_id,
            workflow_type=record.workflow_type,
            status=record.status.value,
            progress=record.progress,
            current_step_id=record.current_step_id,
            result=record.result,
            error=record.error,
            step_history=[
                StepHistoryDTO(
                    step_id=step.step_id,
                    success=step.success,
                    error=step.error,
                    started_at=step.started_at,
                    finished_at=step.finished_at,
                    duration_ms=step.duration_ms,
                )
                for step in record.step_history
            ],
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class StepDescriptorDTO(BaseModel):
    step_id: str
    priority: int
    name: str = ""
    description: str = ""

    @classmethod
    def from_descriptor(cls, descriptor: StepDescriptor) -> "StepDescriptorDTO":
        return cls(
            step_id=descriptor.step_id,
            priority=descriptor.priority,
            name=descriptor.name,
            description=descriptor.description,
        )


class WorkflowDTO(BaseModel):
    """A registered workflow type and its steps in execution order."""

    workflow_type: str
    steps: List[StepDescriptorDTO] = Field(default_factory=list)
