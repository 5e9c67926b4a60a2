"""Orchestration models - ExecutionContext, StepResult, OrchestrationRecord."""

import asyncio
import copy
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from core.domain.enums.orchestration_status import OrchestrationStatus

from .exceptions import InvalidStatusTransition


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CancellationToken:
    """Cooperative cancellation flag shared by a run and its steps."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds, waking early on cancellation.

        Returns:
            True if cancellation was requested
        """
        try:
            await asyncio.wait_for(self._event.wait(), timeout)
        except asyncio.TimeoutError:
            pass
        return self.cancelled


class ExecutionContext:
    """Data and metadata threaded through one orchestration run.

    ``data`` is a read-only deep copy of the original input. ``metadata``
    is a read-only view; only the orchestrator grows it, via :meth:`merge`,
    after a step succeeds.
    """

    def __init__(
        self,
        orchestration_id: str,
        workflow_type: str,
        data: Mapping[str, Any],
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        self.orchestration_id = orchestration_id
        self.workflow_type = workflow_type
        self._data = MappingProxyType(copy.deepcopy(dict(data)))
        self._metadata: Dict[str, Any] = {}
        self.cancellation = cancellation or CancellationToken()

    @property
    def data(self) -> Mapping[str, Any]:
        return self._data

    @property
    def metadata(self) -> Mapping[str, Any]:
        return MappingProxyType(self._metadata)

    def merge(self, patch: Optional[Mapping[str, Any]]) -> None:
        """Additively merge a step's metadata patch."""
        if patch:
            self._metadata.update(patch)

    def snapshot(self) -> Dict[str, Any]:
        """Return a plain copy of the accumulated metadata."""
        return dict(self._metadata)


@dataclass(frozen=True)
class StepResult:
    """Outcome of one step: a success with a payload and metadata patch, or a failure."""

    success: bool
    payload: Any = None
    metadata: Mapping[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


@dataclass(frozen=True)
class StepRecord:
    """History entry for one attempted step."""

    step_id: str
    success: bool
    started_at: datetime
    finished_at: datetime
    duration_ms: int
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_id": self.step_id,
            "success": self.success,
            "error": self.error,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat(),
            "duration_ms": self.duration_ms,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "StepRecord":
        return cls(
            step_id=raw["step_id"],
            success=raw["success"],
            error=raw.get("error"),
            started_at=datetime.fromisoformat(raw["started_at"]),
            finished_at=datetime.fromisoformat(raw["finished_at"]),
            duration_ms=raw["duration_ms"],
        )


@dataclass(frozen=True)
class OrchestrationRecord:
    """Snapshot of one orchestration run.

    Records are immutable; every update builds a new record with
    :meth:`transition_to` and the store swaps it in whole.
    """

    orchestration_id: str
    workflow_type: str
    status: OrchestrationStatus = OrchestrationStatus.PENDING
    progress: int = 0
    current_step_id: Optional[str] = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    step_history: Tuple[StepRecord, ...] = ()
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def pending(cls, orchestration_id: str, workflow_type: str) -> "OrchestrationRecord":
        now = utc_now()
        return cls(
            orchestration_id=orchestration_id,
            workflow_type=workflow_type,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def transition_to(self, status: Optional[OrchestrationStatus] = None, **changes: Any) -> "OrchestrationRecord":
        """Build the next snapshot of this record.

        Raises:
            InvalidStatusTransition: If the record is terminal, the status
                change is not allowed, or progress would go backwards
        """
        target = status or self.status
        if not self.status.can_transition_to(target):
            raise InvalidStatusTransition(
                f"Orchestration {self.orchestration_id}: "
                f"cannot move from {self.status.value} to {target.value}"
            )
        progress = changes.get("progress", self.progress)
        if progress < self.progress or progress > 100:
            raise InvalidStatusTransition(
                f"Orchestration {self.orchestration_id}: "
                f"invalid progress {progress} (current {self.progress})"
            )
        return replace(self, status=target, updated_at=utc_now(), **changes)

    def check_successor(self, successor: "OrchestrationRecord") -> None:
        """Validate that ``successor`` may replace this record."""
        if successor.orchestration_id != self.orchestration_id:
            raise InvalidStatusTransition("Cannot replace a record with another orchestration's record")
        if not self.status.can_transition_to(successor.status):
            raise InvalidStatusTransition(
                f"Orchestration {self.orchestration_id}: "
                f"cannot move from {self.status.value} to {successor.status.value}"
            )
        if successor.progress < self.progress:
            raise InvalidStatusTransition(
                f"Orchestration {self.orchestration_id}: progress cannot decrease"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "orchestration_id": self.orchestration_id,
            "workflow_type": self.workflow_type,
            "status": self.status.value,
            "progress": self.progress,
            "current_step_id": self.current_step_id,
            "result": self.result,
            "error": self.error,
            "step_history": [step.to_dict() for step in self.step_history],
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
