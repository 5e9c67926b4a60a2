"""Step contract - StepDescriptor, StepExecutor and the result builders."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from .models import ExecutionContext, StepResult


@dataclass(frozen=True)
class StepDescriptor:
    """Fixed identity of a step, used only for registration and ordering."""

    step_id: str
    workflow_type: str
    priority: int
    name: str = ""
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "step_id": self.step_id,
            "workflow_type": self.workflow_type,
            "priority": self.priority,
            "name": self.name or self.step_id,
            "description": self.description,
        }


@runtime_checkable
class StepExecutor(Protocol):
    """Protocol for a single unit of work in a workflow.

    Implementations must return a :class:`StepResult` for every expected
    failure (network errors, timeouts, missing records) instead of raising.
    Per-run state lives only in the context.
    """

    descriptor: StepDescriptor

    async def execute(self, context: ExecutionContext) -> StepResult:
        """Run the step.

        Args:
            context: Shared context of the current run

        Returns:
            StepResult built with :func:`success` or :func:`failure`
        """
        ...


def success(payload: Any = None, metadata: Optional[Mapping[str, Any]] = None) -> StepResult:
    """Build a successful result.

    Args:
        payload: Step output (e.g. the entity it created)
        metadata: Keys to merge into the run's metadata for later steps
    """
    return StepResult(success=True, payload=payload, metadata=dict(metadata or {}))


def failure(message: str) -> StepResult:
    """Build a failed result carrying a descriptive message."""
    return StepResult(success=False, error=message)
