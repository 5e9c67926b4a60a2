from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.infrastructure.database.config import DatabaseSettings
from core.settings.modules.orchestration_settings import OrchestrationSettings
from core.settings.modules.service_settings import ServiceSettings
from core.settings.modules.starknet_settings import StarknetSettings


class AppSettings(BaseModel):
    """Application settings aggregator."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    service: ServiceSettings
    orchestration: OrchestrationSettings
    starknet: StarknetSettings
    database: DatabaseSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    return AppSettings(
        service=ServiceSettings(),
        orchestration=OrchestrationSettings(),
        starknet=StarknetSettings(),
        database=DatabaseSettings(),
    )
