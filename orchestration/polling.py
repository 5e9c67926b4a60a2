"""Bounded polling for steps that wait on eventually-consistent collaborators."""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from core.infrastructure.logging import get_logger

from .models import CancellationToken

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]
Probe = Callable[[], Awaitable[Optional[T]]]

logger = get_logger("orchestration.polling")


@dataclass(frozen=True)
class PollPolicy:
    """Fixed interval, fixed attempt count."""

    interval_seconds: float = 5.0
    max_attempts: int = 60

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.interval_seconds < 0:
            raise ValueError("interval_seconds must not be negative")


async def poll_until(
    probe: Probe,
    policy: PollPolicy,
    *,
    sleep: Sleep = asyncio.sleep,
    cancellation: Optional[CancellationToken] = None,
    description: str = "condition",
) -> Optional[T]:
    """Call ``probe`` until it returns a value other than None.

    A probe that raises consumes an attempt. There is no sleep after the
    last attempt.

    Args:
        probe: Async callable returning the awaited value, or None to keep waiting
        policy: Interval and attempt bound
        sleep: Sleep function (injectable for tests); the default wakes early on cancellation
        cancellation: Optional token; polling stops once it is cancelled
        description: What is being waited for, for logs

    Returns:
        The probe's value, or None if attempts ran out or the run was cancelled
    """
    for attempt in range(1, policy.max_attempts + 1):
        if cancellation is not None and cancellation.cancelled:
            logger.info(f"Stopped waiting for {description}: cancelled")
            return None

        try:
            value = await probe()
        except Exception as exc:
            logger.warning(
                f"Error while waiting for {description} "
                f"(attempt {attempt}/{policy.max_attempts}): {exc}"
            )
            value = None

        if value is not None:
            return value

        if attempt < policy.max_attempts:
            logger.debug(
                f"Waiting for {description} (attempt {attempt}/{policy.max_attempts}), "
                f"retrying in {policy.interval_seconds}s"
            )
            if cancellation is not None and sleep is asyncio.sleep:
                await cancellation.wait(policy.interval_seconds)
            else:
                await sleep(policy.interval_seconds)

    logger.warning(f"Gave up waiting for {description} after {policy.max_attempts} attempts")
    return None
