"""Fixtures for orchestration engine tests."""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

import pytest

from orchestration.models import ExecutionContext, StepResult
from orchestration.step import StepDescriptor, failure, success

WORKFLOW = "agent-creation"


class ScriptedStep:
    """Step that records its calls and returns a scripted result."""

    def __init__(
        self,
        step_id: str,
        priority: int,
        workflow_type: str = WORKFLOW,
        metadata: Optional[Mapping[str, Any]] = None,
        payload: Any = None,
        error: Optional[str] = None,
        raises: Optional[Exception] = None,
        hook: Optional[Callable[[ExecutionContext], Awaitable[Any]]] = None,
        calls: Optional[List[str]] = None,
    ) -> None:
        self.descriptor = StepDescriptor(step_id=step_id, workflow_type=workflow_type, priority=priority)
        self.metadata = dict(metadata or {})
        self.payload = payload
        self.error = error
        self.raises = raises
        self.hook = hook
        self.calls = calls if calls is not None else []
        self.contexts: List[Dict[str, Any]] = []

    async def execute(self, context: ExecutionContext) -> StepResult:
        self.calls.append(self.descriptor.step_id)
        self.contexts.append(context.snapshot())
        if self.hook is not None:
            outcome = await self.hook(context)
            if outcome is not None:
                return outcome
        if self.raises is not None:
            raise self.raises
        if self.error is not None:
            return failure(self.error)
        return success(self.payload, self.metadata)


class FakeEventBus:
    """Fake EventBus for testing."""

    def __init__(self) -> None:
        self.events: list = []

    async def publish(self, event: object) -> None:
        self.events.append(event)

    def subscribe(self, event_name: str, handler: object) -> None:
        pass

    def names_for(self, orchestration_id: str) -> List[str]:
        return [e.name for e in self.events if e.metadata.orchestration_id == orchestration_id]


@pytest.fixture
def scripted_step():
    return ScriptedStep


@pytest.fixture
def fake_event_bus() -> FakeEventBus:
    return FakeEventBus()


@pytest.fixture
def gate():
    """An asyncio.Event a step can block on until the test releases it."""
    return asyncio.Event()
