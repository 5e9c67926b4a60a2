"""Orchestrator - starts runs in the background and serves status polls."""

import asyncio
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from pydantic_core import PydanticSerializationError, to_jsonable_python

from core.domain.enums.orchestration_status import OrchestrationStatus
from core.domain.value_objects import OrchestrationID
from core.infrastructure.logging import get_logger

from . import events as event_names
from .bus import EventBusProtocol
from .events import Event, EventMetadata
from .exceptions import OrchestrationNotFound
from .models import (
    CancellationToken,
    ExecutionContext,
    OrchestrationRecord,
    StepRecord,
    StepResult,
    utc_now,
)
from .registry import StepRegistry
from .step import StepExecutor, failure
from .store import StatusStore

CANCELLED_MESSAGE = "Orchestration cancelled"


class Orchestrator:
    """Orchestrator for running registered workflows as fire-and-forget tasks.

    ``start_orchestration`` returns an id as soon as the pending record is
    written; the pipeline runs as an asyncio task and callers follow it
    through ``get_orchestration_status``. A failed step ends the run; the
    orchestrator never retries or rolls back.
    """

    def __init__(
        self,
        registry: StepRegistry,
        store: StatusStore,
        event_bus: Optional[EventBusProtocol] = None,
        max_concurrent_runs: int = 16,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        """Initialize orchestrator.

        Args:
            registry: Immutable step registry built at startup
            store: StatusStore holding one record per run
            event_bus: Optional EventBusProtocol for lifecycle events
            max_concurrent_runs: Upper bound on pipelines executing at once
            id_factory: Optional orchestration id generator
        """
        if max_concurrent_runs < 1:
            raise ValueError("max_concurrent_runs must be at least 1")

        self._registry = registry
        self._store = store
        self._event_bus = event_bus
        self._semaphore = asyncio.Semaphore(max_concurrent_runs)
        self._id_factory = id_factory or (lambda: str(OrchestrationID.generate()))
        self._tasks: Dict[str, asyncio.Task] = {}
        self._tokens: Dict[str, CancellationToken] = {}
        self._logger = get_logger("orchestration.orchestrator")

    @property
    def registry(self) -> StepRegistry:
        return self._registry

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def start_orchestration(
        self, workflow_type: str, input_: Optional[Mapping[str, Any]] = None
    ) -> str:
        """Start a workflow run in the background.

        Args:
            workflow_type: Registered workflow type
            input_: Original input, available to every step as ``context.data``

        Returns:
            The new orchestration id

        Raises:
            UnknownWorkflowType: If the workflow type is not registered; no
                record is created in that case
        """
        steps = self._registry.steps_for(workflow_type)

        orchestration_id = self._id_factory()
        token = CancellationToken()
        context = ExecutionContext(
            orchestration_id=orchestration_id,
            workflow_type=workflow_type,
            data=input_ or {},
            cancellation=token,
        )

        await self._store.create(OrchestrationRecord.pending(orchestration_id, workflow_type))

        task = asyncio.create_task(
            self._run_pipeline(orchestration_id, steps, context),
            name=f"orchestration-{orchestration_id}",
        )
        self._tasks[orchestration_id] = task
        self._tokens[orchestration_id] = token
        task.add_done_callback(lambda _task, oid=orchestration_id: self._forget(oid))

        self._logger.info(
            f"Orchestration {orchestration_id} scheduled "
            f"(workflow: {workflow_type}, steps: {len(steps)})"
        )
        return orchestration_id

    async def get_orchestration_status(self, orchestration_id: str) -> OrchestrationRecord:
        """Return the current snapshot of a run.

        Raises:
            OrchestrationNotFound: If the id is unknown
        """
        record = await self._store.get(orchestration_id)
        if record is None:
            raise OrchestrationNotFound(orchestration_id)
        return record

    async def list_orchestrations(self) -> List[OrchestrationRecord]:
        return await self._store.list_records()

    def cancel_orchestration(self, orchestration_id: str) -> bool:
        """Request cancellation of an active run.

        The run ends failed at the next step boundary, or as soon as a
        polling step notices the request.

        Returns:
            True if the run was active, False otherwise
        """
        token = self._tokens.get(orchestration_id)
        if token is None:
            return False
        token.cancel()
        self._logger.info(f"Cancellation requested for orchestration {orchestration_id}")
        return True

    def is_active(self, orchestration_id: str) -> bool:
        return orchestration_id in self._tasks

    async def wait_for(self, orchestration_id: str) -> OrchestrationRecord:
        """Wait until a run has finished and return its final record."""
        task = self._tasks.get(orchestration_id)
        if task is not None:
            await asyncio.wait({task})
        return await self.get_orchestration_status(orchestration_id)

    async def shutdown(self, cancel_running: bool = False) -> None:
        """Wait for every active run to finish.

        Args:
            cancel_running: Request cancellation of active runs first
        """
        tasks = list(self._tasks.values())
        if not tasks:
            return
        if cancel_running:
            for token in list(self._tokens.values()):
                token.cancel()
        self._logger.info(f"Waiting for {len(tasks)} active orchestration(s)")
        await asyncio.gather(*tasks, return_exceptions=True)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _forget(self, orchestration_id: str) -> None:
        self._tasks.pop(orchestration_id, None)
        self._tokens.pop(orchestration_id, None)

    async def _run_pipeline(
        self,
        orchestration_id: str,
        steps: Sequence[StepExecutor],
        context: ExecutionContext,
    ) -> None:
        """Background task body. Never lets an exception escape."""
        try:
            async with self._semaphore:
                await self._execute_steps(orchestration_id, steps, context)
        except Exception as exc:
            self._logger.error(
                f"Orchestration {orchestration_id} runner error: {exc}", exc_info=True
            )
            await self._fail_after_runner_error(orchestration_id, str(exc) or type(exc).__name__)

    async def _execute_steps(
        self,
        orchestration_id: str,
        steps: Sequence[StepExecutor],
        context: ExecutionContext,
    ) -> None:
        record = await self.get_orchestration_status(orchestration_id)
        record = record.transition_to(OrchestrationStatus.RUNNING)
        await self._store.replace(record)

        await self._publish_event(
            event_names.ORCHESTRATION_STARTED,
            record,
            {"step_count": len(steps)},
        )

        total = len(steps)
        history: List[StepRecord] = []
        last_payload: Any = None

        for index, step in enumerate(steps, start=1):
            step_id = step.descriptor.step_id

            if context.cancellation.cancelled:
                await self._finish_failed(record, record.current_step_id, CANCELLED_MESSAGE)
                return

            record = record.transition_to(current_step_id=step_id)
            await self._store.replace(record)
            await self._publish_event(event_names.STEP_STARTED, record, {"step_id": step_id})

            started_at = utc_now()
            result = await self._invoke(step, context)
            finished_at = utc_now()

            history.append(
                StepRecord(
                    step_id=step_id,
                    success=result.success,
                    error=result.error,
                    started_at=started_at,
                    finished_at=finished_at,
                    duration_ms=int((finished_at - started_at).total_seconds() * 1000),
                )
            )

            if not result.success:
                error = CANCELLED_MESSAGE if context.cancellation.cancelled else result.error
                record = record.transition_to(step_history=tuple(history))
                await self._publish_event(
                    event_names.STEP_FAILED, record, {"step_id": step_id, "error": error}
                )
                await self._finish_failed(record, step_id, error or "Step failed")
                return

            context.merge(result.metadata)
            last_payload = result.payload
            record = record.transition_to(
                step_history=tuple(history),
                progress=index * 100 // total,
            )
            await self._store.replace(record)
            await self._publish_event(event_names.STEP_SUCCEEDED, record, {"step_id": step_id})

        record = record.transition_to(
            OrchestrationStatus.COMPLETED,
            progress=100,
            result=self._build_result(context, last_payload),
        )
        await self._store.replace(record)
        await self._publish_event(event_names.ORCHESTRATION_COMPLETED, record, {})

        self._logger.info(
            f"Orchestration {orchestration_id} completed "
            f"({record.workflow_type}, {len(history)} step(s))"
        )

    async def _invoke(self, step: StepExecutor, context: ExecutionContext) -> StepResult:
        """Run one step, turning a stray exception into a failure."""
        step_id = step.descriptor.step_id
        try:
            result = await step.execute(context)
        except Exception as exc:
            self._logger.error(
                f"Step {step_id} of orchestration {context.orchestration_id} raised: {exc}",
                exc_info=True,
            )
            return failure(str(exc) or type(exc).__name__)

        if not isinstance(result, StepResult):
            return failure(f"Step {step_id} returned {type(result).__name__} instead of a StepResult")
        return result

    async def _finish_failed(
        self, record: OrchestrationRecord, step_id: Optional[str], error: str
    ) -> None:
        record = record.transition_to(
            OrchestrationStatus.FAILED,
            current_step_id=step_id,
            error=error,
        )
        await self._store.replace(record)
        await self._publish_event(
            event_names.ORCHESTRATION_FAILED, record, {"step_id": step_id, "error": error}
        )
        self._logger.warning(
            f"Orchestration {record.orchestration_id} failed at step {step_id}: {error}"
        )

    async def _fail_after_runner_error(self, orchestration_id: str, message: str) -> None:
        try:
            record = await self._store.get(orchestration_id)
            if record is None or record.is_terminal:
                return
            if record.status == OrchestrationStatus.PENDING:
                record = record.transition_to(OrchestrationStatus.RUNNING)
                await self._store.replace(record)
            await self._store.replace(
                record.transition_to(OrchestrationStatus.FAILED, error=message)
            )
        except Exception as exc:
            self._logger.error(
                f"Could not mark orchestration {orchestration_id} as failed: {exc}",
                exc_info=True,
            )

    def _build_result(self, context: ExecutionContext, payload: Any) -> Dict[str, Any]:
        """Metadata snapshot plus the last step's payload under ``"payload"``.

        The payload is kept only when it converts to JSON-friendly data. A
        ``"payload"`` metadata key written by a step wins over the payload.
        """
        result = context.snapshot()
        if payload is None:
            return result
        if "payload" in result:
            self._logger.warning(
                f"Orchestration {context.orchestration_id}: metadata key 'payload' "
                f"shadows the final step payload; payload omitted from result"
            )
            return result
        try:
            result["payload"] = to_jsonable_python(payload)
        except PydanticSerializationError as exc:
            self._logger.warning(
                f"Orchestration {context.orchestration_id}: final step payload "
                f"of type {type(payload).__name__} is not JSON-friendly; omitted from result: {exc}"
            )
        return result

    async def _publish_event(
        self, name: str, record: OrchestrationRecord, payload: Dict[str, object]
    ) -> None:
        """Publish a lifecycle event. Bus errors never affect the run."""
        if self._event_bus is None:
            return

        metadata = EventMetadata(
            orchestration_id=record.orchestration_id,
            workflow_type=record.workflow_type,
            timestamp=utc_now(),
        )
        event = Event(
            name=name,
            payload={"status": record.status.value, "progress": record.progress, **payload},
            metadata=metadata,
        )
        try:
            await self._event_bus.publish(event)
        except Exception as exc:
            self._logger.error(f"Failed to publish {name}: {exc}", exc_info=True)
