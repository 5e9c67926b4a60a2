"""
Workflow registry endpoints.
"""
from fastapi import APIRouter, Depends, status
from fastapi.encoders import jsonable_encoder

from api.dependencies import get_orchestrator
from core.application.dtos import StepDescriptorDTO, WorkflowDTO
from orchestration import Orchestrator


router = APIRouter()


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    summary="List registered workflows",
    description="Each workflow type with its steps in execution order",
)
async def list_workflows(orchestrator: Orchestrator = Depends(get_orchestrator)):
    registry = orchestrator.registry
    workflows = [
        WorkflowDTO(
            workflow_type=workflow_type,
            steps=[StepDescriptorDTO.from_descriptor(d) for d in registry.describe(workflow_type)],
        )
        for workflow_type in registry.workflow_types()
    ]
    return {"workflows": jsonable_encoder(workflows)}
