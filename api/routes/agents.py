"""
Agent creation endpoints.

Starts agent creation workflows and reports their progress.
"""
import json
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from api.dependencies import get_agent_creation_service, get_agent_repository
from core.application.commands import ProfilePictureUpload
from core.application.dtos import CreateAgentRequest
from core.application.services import AgentCreationService, InvalidAgentRequest
from orchestration.exceptions import OrchestrationNotFound, UnknownWorkflowType


logger = logging.getLogger(__name__)
router = APIRouter()

_JSON_FORM_FIELDS = ("character_config", "agent_config")
_FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


async def _read_creation_request(request: Request) -> tuple:
    """Parse a JSON body or a form post; multipart forms may carry a ``profile_picture``."""
    picture: Optional[ProfilePictureUpload] = None

    if request.headers.get("content-type", "").startswith(_FORM_CONTENT_TYPES):
        form = await request.form()
        raw: Dict[str, Any] = {}
        for key, value in form.items():
            if isinstance(value, UploadFile):
                if key == "profile_picture":
                    picture = ProfilePictureUpload(filename=value.filename or "", content=await value.read())
                continue
            if key in _JSON_FORM_FIELDS and value:
                try:
                    value = json.loads(value)
                except ValueError:
                    raise HTTPException(
                        status_code=status.HTTP_400_BAD_REQUEST,
                        detail=f"{key} must be a JSON object",
                    )
            raw[key] = value
    else:
        try:
            raw = await request.json()
        except ValueError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON body")

    try:
        return CreateAgentRequest.model_validate(raw), picture
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=jsonable_encoder(exc.errors(include_url=False, include_context=False)),
        )


# =============================================================================
# CREATE AGENT
# =============================================================================

@router.post(
    "",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Initiate creation of a new agent",
    description="""
    Starts the agent creation workflow in the background.

    Accepts a JSON body or a multipart form (with an optional
    `profile_picture` image). Poll `/creation/{orchestration_id}` for progress.
    """,
)
async def create_agent(
    request: Request,
    service: AgentCreationService = Depends(get_agent_creation_service),
):
    dto, picture = await _read_creation_request(request)

    try:
        created = await service.create_agent(dto, picture)
    except InvalidAgentRequest as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except UnknownWorkflowType as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Agent creation failed to start: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to initiate agent creation: {e}",
        )

    return {"status": "success", "data": created.model_dump()}


# =============================================================================
# CREATION STATUS
# =============================================================================

@router.get(
    "/creation/{orchestration_id}",
    status_code=status.HTTP_200_OK,
    summary="Get the status of an agent creation process",
)
async def get_creation_status(
    orchestration_id: str,
    service: AgentCreationService = Depends(get_agent_creation_service),
):
    try:
        creation_status = await service.get_creation_status(orchestration_id)
    except OrchestrationNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Creation process {orchestration_id} not found",
        )

    return {"status": "success", "data": jsonable_encoder(creation_status)}


# =============================================================================
# FIND BY TRANSACTION
# =============================================================================

@router.get(
    "/by-transaction",
    status_code=status.HTTP_200_OK,
    summary="Find an agent by deployment transaction hash",
)
async def find_by_transaction(
    transaction_hash: str = Query(..., min_length=1, description="Deployment fees transaction hash"),
    creator_wallet: Optional[str] = Query(None, description="Creator wallet filter"),
    repository=Depends(get_agent_repository),
):
    agent = await repository.find_by_transaction_hash(transaction_hash, creator_wallet)
    if agent is None:
        logger.info(f"No agent found with transaction hash {transaction_hash}")

    return {"status": "success", "data": {"agent": jsonable_encoder(agent)}}
