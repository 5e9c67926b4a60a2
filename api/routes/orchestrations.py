"""
Orchestration monitoring endpoints.

Lists runs, returns full records and accepts cancellation requests.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.encoders import jsonable_encoder

from api.dependencies import get_orchestrator
from core.application.dtos import OrchestrationDTO
from orchestration import Orchestrator
from orchestration.exceptions import OrchestrationNotFound


logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    summary="List orchestrations",
    description="All known orchestration runs, newest first",
)
async def list_orchestrations(orchestrator: Orchestrator = Depends(get_orchestrator)):
    records = await orchestrator.list_orchestrations()
    return {
        "total": len(records),
        "orchestrations": [jsonable_encoder(OrchestrationDTO.from_record(r)) for r in records],
    }


@router.get(
    "/{orchestration_id}",
    status_code=status.HTTP_200_OK,
    summary="Get orchestration by ID",
)
async def get_orchestration(
    orchestration_id: str,
    orchestrator: Orchestrator = Depends(get_orchestrator),
):
    try:
        record = await orchestrator.get_orchestration_status(orchestration_id)
    except OrchestrationNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return jsonable_encoder(OrchestrationDTO.from_record(record))


@router.post(
    "/{orchestration_id}/cancel",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Request cancellation of a running orchestration",
    description="""
    The run ends `failed` with error "Orchestration cancelled" at the next
    step boundary, or as soon as a waiting step notices the request.
    """,
)
async def cancel_orchestration(
    orchestration_id: str,
    orchestrator: Orchestrator = Depends(get_orchestrator),
):
    try:
        record = await orchestrator.get_orchestration_status(orchestration_id)
    except OrchestrationNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    if record.is_terminal:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Orchestration {orchestration_id} already {record.status.value}",
        )

    if not orchestrator.cancel_orchestration(orchestration_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Orchestration {orchestration_id} is not running in this instance",
        )

    return {"orchestration_id": orchestration_id, "status": "cancelling"}
