"""Orchestration layer - step-based workflow engine with status polling."""

from .bus import EventBusProtocol, InMemoryEventBus
from .events import Event, EventMetadata
from .exceptions import (
    DuplicateOrchestrationError,
    DuplicateStepError,
    InvalidStatusTransition,
    OrchestrationError,
    OrchestrationNotFound,
    UnknownWorkflowType,
)
from .models import (
    CancellationToken,
    ExecutionContext,
    OrchestrationRecord,
    StepRecord,
    StepResult,
)
from .orchestrator import Orchestrator
from .polling import PollPolicy, poll_until
from .registry import StepRegistry
from .step import StepDescriptor, StepExecutor, failure, success
from .store import InMemoryStatusStore, StatusStore

__all__ = [
    "CancellationToken",
    "DuplicateOrchestrationError",
    "DuplicateStepError",
    "Event",
    "EventBusProtocol",
    "EventMetadata",
    "ExecutionContext",
    "InMemoryEventBus",
    "InMemoryStatusStore",
    "InvalidStatusTransition",
    "OrchestrationError",
    "OrchestrationNotFound",
    "OrchestrationRecord",
    "Orchestrator",
    "PollPolicy",
    "StatusStore",
    "StepDescriptor",
    "StepExecutor",
    "StepRecord",
    "StepRegistry",
    "StepResult",
    "UnknownWorkflowType",
    "create_default_orchestrator",
    "failure",
    "poll_until",
    "success",
]


def create_default_orchestrator(registry: StepRegistry, max_concurrent_runs: int = 16) -> Orchestrator:
    """Create an orchestrator with in-memory status store and event bus.

    Args:
        registry: StepRegistry built at startup
        max_concurrent_runs: Upper bound on pipelines executing at once

    Returns:
        Orchestrator instance
    """
    return Orchestrator(
        registry=registry,
        store=InMemoryStatusStore(),
        event_bus=InMemoryEventBus(),
        max_concurrent_runs=max_concurrent_runs,
    )
