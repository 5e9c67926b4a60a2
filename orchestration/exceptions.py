"""Orchestration errors."""


class OrchestrationError(Exception):
    """Base class for orchestration engine errors."""


class UnknownWorkflowType(OrchestrationError):
    """Raised when a workflow type has no registered steps."""

    def __init__(self, workflow_type: str) -> None:
        self.workflow_type = workflow_type
        super().__init__(f"No steps registered for workflow type: {workflow_type}")


class OrchestrationNotFound(OrchestrationError):
    """Raised when an orchestration id was never created (or was purged)."""

    def __init__(self, orchestration_id: str) -> None:
        self.orchestration_id = orchestration_id
        super().__init__(f"Orchestration {orchestration_id} not found")


class DuplicateStepError(OrchestrationError):
    """Raised at registry construction for clashing step ids or priorities."""


class DuplicateOrchestrationError(OrchestrationError):
    """Raised when a record is created twice for the same id."""

    def __init__(self, orchestration_id: str) -> None:
        self.orchestration_id = orchestration_id
        super().__init__(f"Orchestration {orchestration_id} already exists")


class InvalidStatusTransition(OrchestrationError):
    """Raised when a record update breaks the status state machine."""
