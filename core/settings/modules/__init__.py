# Settings modules
from .app_settings import AppSettings, get_app_settings
from .orchestration_settings import OrchestrationSettings
from .service_settings import ServiceSettings
from .starknet_settings import StarknetSettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "OrchestrationSettings",
    "ServiceSettings",
    "StarknetSettings",
]
