"""Orchestration events - Event, EventMetadata."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class EventMetadata:
    """Metadata for an event."""

    orchestration_id: str
    workflow_type: str
    timestamp: datetime


@dataclass
class Event:
    """Lifecycle event of an orchestration run."""

    name: str
    payload: dict[str, object]
    metadata: EventMetadata


ORCHESTRATION_STARTED = "orchestration.started"
STEP_STARTED = "orchestration.step.started"
STEP_SUCCEEDED = "orchestration.step.succeeded"
STEP_FAILED = "orchestration.step.failed"
ORCHESTRATION_COMPLETED = "orchestration.completed"
ORCHESTRATION_FAILED = "orchestration.failed"
