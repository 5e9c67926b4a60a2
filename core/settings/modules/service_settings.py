from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import LaunchpadBaseSettings


class ServiceSettings(LaunchpadBaseSettings):
    """
    Service-wide settings.
    Loaded from env with prefix APP_*, except the workflow selector.
    """

    log_level: str = "INFO"
    upload_dir: str = "uploads"
    agent_creation_workflow: str = Field("agent-creation", alias="AGENT_CREATION_WORKFLOW")

    model_config = {"env_prefix": "APP_"}
