from __future__ import annotations

from typing import Literal

from pydantic import Field

from core.settings.base_settings import LaunchpadBaseSettings
from orchestration.polling import PollPolicy


class OrchestrationSettings(LaunchpadBaseSettings):
    """
    Orchestration engine settings.
    Loaded from env with prefix ORCHESTRATION_*
    """

    store_backend: Literal["memory", "database"] = "memory"
    max_concurrent_runs: int = Field(16, ge=1)

    # Waiting for the deployment payment to be accepted on chain
    poll_interval_seconds: float = Field(5.0, ge=0)
    poll_max_attempts: int = Field(60, ge=1)

    # Waiting for a started container to report its runtime identity
    runtime_poll_interval_seconds: float = Field(5.0, ge=0)
    runtime_poll_max_attempts: int = Field(60, ge=1)

    model_config = {"env_prefix": "ORCHESTRATION_"}

    def payment_poll_policy(self) -> PollPolicy:
        return PollPolicy(
            interval_seconds=self.poll_interval_seconds,
            max_attempts=self.poll_max_attempts,
        )

    def runtime_poll_policy(self) -> PollPolicy:
        return PollPolicy(
            interval_seconds=self.runtime_poll_interval_seconds,
            max_attempts=self.runtime_poll_max_attempts,
        )
