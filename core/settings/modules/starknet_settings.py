from __future__ import annotations

from core.settings.base_settings import LaunchpadBaseSettings


class StarknetSettings(LaunchpadBaseSettings):
    """
    Settings for the Starknet JSON-RPC node.
    Loaded from env with prefix STARKNET_*
    """

    rpc_url: str = "https://starknet-sepolia.public.blastapi.io/rpc/v0_7"
    use_mock: bool = True
    request_timeout_seconds: float = 10.0

    model_config = {"env_prefix": "STARKNET_"}
