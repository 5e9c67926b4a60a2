"""
Orchestration Status Enum.

Status values for orchestration runs and the transitions allowed between them.
"""
from enum import Enum


class OrchestrationStatus(str, Enum):
    """Orchestration status values."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Completed and failed runs never change again."""
        return self in (OrchestrationStatus.COMPLETED, OrchestrationStatus.FAILED)

    def can_transition_to(self, target: "OrchestrationStatus") -> bool:
        """Check whether moving from this status to ``target`` is allowed.

        Staying in the same non-terminal status is allowed so that a running
        record can be updated with progress.
        """
        if self.is_terminal:
            return False
        if target == self:
            return True
        return target in _TRANSITIONS[self]


_TRANSITIONS = {
    OrchestrationStatus.PENDING: {OrchestrationStatus.RUNNING},
    OrchestrationStatus.RUNNING: {OrchestrationStatus.COMPLETED, OrchestrationStatus.FAILED},
    OrchestrationStatus.COMPLETED: set(),
    OrchestrationStatus.FAILED: set(),
}
