"""
Agent Creation Service.

Entry point for starting agent creation workflows and polling them.
"""
import logging
import os
import time
from typing import Any, Dict, Mapping, Optional

from core.application.commands import ProfilePictureUpload
from core.application.dtos import AgentCreationDTO, CreateAgentRequest, CreationStatusDTO
from core.application.interfaces import IBlobStore
from core.application.workflows.types import AGENT_CREATION
from orchestration import Orchestrator


logger = logging.getLogger(__name__)

ALLOWED_PICTURE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")
MAX_PICTURE_BYTES = 5 * 1024 * 1024


class InvalidAgentRequest(ValueError):
    """Raised for creation requests that cannot be started."""


def _chat_id_suffix(name: Optional[str]) -> str:
    if name:
        return format(sum(ord(char) for char in name), "x")[:8]
    return format(int(time.time() * 1000), "x")[-8:]


def convert_character_config(character_config: Mapping[str, Any], fallback_name: str) -> Dict[str, Any]:
    """
    Convert a legacy character config into the agent config format.

    Args:
        character_config: Legacy config (name, bio, lore, knowledge, style, ...)
        fallback_name: Name used when the character has none

    Returns:
        Agent config dict
    """
    name = character_config.get("name")
    bio = character_config.get("bio")
    lore = character_config.get("lore")
    knowledge = character_config.get("knowledge")
    style = character_config.get("style") or {}

    objectives = []
    if isinstance(style, Mapping) and isinstance(style.get("all"), list):
        objectives = [f"Style: {entry}" for entry in style["all"]]

    return {
        "name": name or fallback_name,
        "bio": "\n\n".join(bio) if isinstance(bio, list) else "",
        "lore": lore if isinstance(lore, list) else [],
        "objectives": objectives,
        "knowledge": knowledge if isinstance(knowledge, list) else [],
        "interval": 30,
        "analysis_period": character_config.get("analysis_period"),
        "chat_id": f"chat-{_chat_id_suffix(name)}",
        "external_plugins": [],
        "internal_plugins": ["leftcurve"],
    }


class AgentCreationService:
    """
    Application service for agent creation.

    Responsibilities:
    - Normalize the request (legacy character config conversion)
    - Upload the optional profile picture under a temporary name
    - Start the configured workflow, removing the upload if that fails
    - Expose creation progress
    """

    def __init__(
        self,
        orchestrator: Orchestrator,
        blob_store: Optional[IBlobStore] = None,
        workflow_type: str = AGENT_CREATION,
    ) -> None:
        self._orchestrator = orchestrator
        self._blob_store = blob_store
        self._workflow_type = workflow_type

    @property
    def workflow_type(self) -> str:
        return self._workflow_type

    async def create_agent(
        self,
        request: CreateAgentRequest,
        profile_picture: Optional[ProfilePictureUpload] = None,
    ) -> AgentCreationDTO:
        """
        Start agent creation.

        Args:
            request: Validated creation request
            profile_picture: Optional picture upload

        Returns:
            AgentCreationDTO with the orchestration id to poll

        Raises:
            InvalidAgentRequest: If the request has no agent configuration or
                the picture is not an accepted image
            UnknownWorkflowType: If the configured workflow is not registered
        """
        if not request.agent_config and not request.character_config:
            raise InvalidAgentRequest(
                "Missing agent configuration (agent_config or character_config required)"
            )
        if profile_picture is not None:
            self._validate_picture(profile_picture)

        workflow_input = request.model_dump()
        if request.character_config and not request.agent_config:
            logger.info("Converting legacy character_config to agent_config format")
            workflow_input["agent_config"] = convert_character_config(
                request.character_config, request.name
            )

        temp_name: Optional[str] = None
        try:
            if profile_picture is not None and self._blob_store is not None:
                temp_name = await self._blob_store.upload_temp_file(
                    profile_picture.filename, profile_picture.content
                )
                logger.info(f"Profile picture uploaded as {temp_name}")

            workflow_input["profile_picture"] = temp_name
            orchestration_id = await self._orchestrator.start_orchestration(
                self._workflow_type, workflow_input
            )
        except Exception as exc:
            logger.error(f"Failed to initiate agent creation for {request.name}: {exc}")
            if temp_name is not None:
                await self._cleanup(temp_name)
            raise

        logger.info(f"Agent creation for {request.name} started: {orchestration_id}")
        return AgentCreationDTO(orchestration_id=orchestration_id)

    async def get_creation_status(self, orchestration_id: str) -> CreationStatusDTO:
        """
        Get creation progress.

        Raises:
            OrchestrationNotFound: If the id is unknown
        """
        record = await self._orchestrator.get_orchestration_status(orchestration_id)
        return CreationStatusDTO.from_record(record)

    @staticmethod
    def _validate_picture(picture: ProfilePictureUpload) -> None:
        _, extension = os.path.splitext(picture.filename.lower())
        if extension not in ALLOWED_PICTURE_EXTENSIONS:
            raise InvalidAgentRequest("Only image files are allowed (jpg, jpeg, png, gif)")
        if len(picture.content) > MAX_PICTURE_BYTES:
            raise InvalidAgentRequest("Profile picture exceeds the 5MB limit")

    async def _cleanup(self, temp_name: str) -> None:
        logger.info(f"Cleaning up temporary file {temp_name}")
        try:
            await self._blob_store.delete_file(temp_name, temp=True)
        except Exception as exc:
            logger.error(f"Failed to delete temporary file {temp_name}: {exc}")
