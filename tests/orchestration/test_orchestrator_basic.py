"""Tests for Orchestrator - basic functionality."""

import itertools
import logging

import pytest

from core.domain.enums.orchestration_status import OrchestrationStatus
from orchestration import events
from orchestration.exceptions import OrchestrationNotFound, UnknownWorkflowType
from orchestration.orchestrator import Orchestrator
from orchestration.registry import StepRegistry
from orchestration.store import InMemoryStatusStore


def _orchestrator(steps, event_bus=None, store=None, **kwargs) -> Orchestrator:
    return Orchestrator(
        registry=StepRegistry(steps),
        store=store or InMemoryStatusStore(),
        event_bus=event_bus,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_start_returns_id_and_run_completes(scripted_step, fake_event_bus):
    """Happy path: container created, then started; result carries runtime id."""
    create = scripted_step("create-container", 2, metadata={"container_id": "c1", "port": 3001})
    start = scripted_step("start-container", 7, metadata={"runtime_agent_id": "r1"}, payload="started")
    orchestrator = _orchestrator([start, create], event_bus=fake_event_bus)

    orchestration_id = await orchestrator.start_orchestration("agent-creation", {"name": "Bot"})
    assert isinstance(orchestration_id, str)

    record = await orchestrator.wait_for(orchestration_id)

    assert record.status == OrchestrationStatus.COMPLETED
    assert record.progress == 100
    assert record.error is None
    assert record.result["runtime_agent_id"] == "r1"
    assert record.result["container_id"] == "c1"
    assert record.result["payload"] == "started"
    assert [s.step_id for s in record.step_history] == ["create-container", "start-container"]
    assert all(s.success for s in record.step_history)

    # Later steps see earlier metadata
    assert start.contexts[0] == {"container_id": "c1", "port": 3001}


@pytest.mark.asyncio
async def test_record_is_pending_right_after_start(scripted_step):
    step = scripted_step("create-db-record", 1)
    orchestrator = _orchestrator([step])

    orchestration_id = await orchestrator.start_orchestration("agent-creation")
    record = await orchestrator.get_orchestration_status(orchestration_id)

    assert record.status == OrchestrationStatus.PENDING
    assert record.progress == 0
    assert record.workflow_type == "agent-creation"

    await orchestrator.wait_for(orchestration_id)


@pytest.mark.asyncio
async def test_execution_order_depends_only_on_priority(scripted_step):
    """Every registration order yields the same execution order."""
    expected = ["a", "b", "c"]

    for order in itertools.permutations([("c", 30), ("a", 10), ("b", 20)]):
        calls: list = []
        steps = [scripted_step(step_id, priority, calls=calls) for step_id, priority in order]
        orchestrator = _orchestrator(steps)

        record = await orchestrator.wait_for(await orchestrator.start_orchestration("agent-creation"))

        assert calls == expected
        assert [s.step_id for s in record.step_history] == expected


@pytest.mark.asyncio
async def test_progress_and_current_step_are_visible_while_running(scripted_step):
    store = InMemoryStatusStore()
    seen = {}

    async def observe(context):
        seen["record"] = await store.get(context.orchestration_id)

    steps = [
        scripted_step("one", 1),
        scripted_step("two", 2, hook=observe),
        scripted_step("three", 3),
        scripted_step("four", 4),
    ]
    orchestrator = _orchestrator(steps, store=store)

    await orchestrator.wait_for(await orchestrator.start_orchestration("agent-creation"))

    record = seen["record"]
    assert record.status == OrchestrationStatus.RUNNING
    assert record.current_step_id == "two"
    assert record.progress == 25


@pytest.mark.asyncio
async def test_context_data_is_the_original_input(scripted_step):
    received = {}

    async def capture(context):
        received.update(context.data)

    payload = {"name": "Bot", "agent_config": {"bio": "x"}}
    orchestrator = _orchestrator([scripted_step("one", 1, hook=capture)])

    await orchestrator.wait_for(await orchestrator.start_orchestration("agent-creation", payload))

    assert received == payload


@pytest.mark.asyncio
async def test_events_published_in_order(scripted_step, fake_event_bus):
    steps = [scripted_step("one", 1), scripted_step("two", 2)]
    orchestrator = _orchestrator(steps, event_bus=fake_event_bus)

    orchestration_id = await orchestrator.start_orchestration("agent-creation")
    await orchestrator.wait_for(orchestration_id)

    assert fake_event_bus.names_for(orchestration_id) == [
        events.ORCHESTRATION_STARTED,
        events.STEP_STARTED,
        events.STEP_SUCCEEDED,
        events.STEP_STARTED,
        events.STEP_SUCCEEDED,
        events.ORCHESTRATION_COMPLETED,
    ]


@pytest.mark.asyncio
async def test_unknown_workflow_type_raises_and_creates_no_record(scripted_step):
    store = InMemoryStatusStore()
    orchestrator = _orchestrator([scripted_step("one", 1)], store=store)

    with pytest.raises(UnknownWorkflowType):
        await orchestrator.start_orchestration("bogus-type", {})

    records = await store.list_records()
    assert all(r.workflow_type != "bogus-type" for r in records)
    assert records == []


@pytest.mark.asyncio
async def test_unknown_id_raises_not_found(scripted_step):
    orchestrator = _orchestrator([scripted_step("one", 1)])

    with pytest.raises(OrchestrationNotFound):
        await orchestrator.get_orchestration_status("does-not-exist")


@pytest.mark.asyncio
async def test_status_reads_are_idempotent(scripted_step):
    orchestrator = _orchestrator([scripted_step("one", 1), scripted_step("two", 2)])
    orchestration_id = await orchestrator.start_orchestration("agent-creation")
    await orchestrator.wait_for(orchestration_id)

    first = await orchestrator.get_orchestration_status(orchestration_id)
    second = await orchestrator.get_orchestration_status(orchestration_id)

    assert first == second
    assert first.status in set(OrchestrationStatus)


@pytest.mark.asyncio
async def test_dataclass_payload_is_converted_in_result(scripted_step):
    from dataclasses import dataclass

    @dataclass
    class Created:
        id: str
        name: str

    orchestrator = _orchestrator([scripted_step("one", 1, payload=Created(id="a1", name="Bot"))])
    record = await orchestrator.wait_for(await orchestrator.start_orchestration("agent-creation"))

    assert record.result["payload"] == {"id": "a1", "name": "Bot"}


@pytest.mark.asyncio
async def test_opaque_payload_is_left_out_of_result(scripted_step, caplog):
    class Handle:
        pass

    orchestrator = _orchestrator(
        [scripted_step("one", 1, metadata={"container_id": "c1"}, payload=Handle())]
    )

    with caplog.at_level(logging.WARNING, logger="orchestration.orchestrator"):
        record = await orchestrator.wait_for(await orchestrator.start_orchestration("agent-creation"))

    assert record.status == OrchestrationStatus.COMPLETED
    assert record.result == {"container_id": "c1"}
    assert "not JSON-friendly" in caplog.text


@pytest.mark.asyncio
async def test_payload_metadata_key_wins_over_step_payload(scripted_step, caplog):
    orchestrator = _orchestrator(
        [
            scripted_step("one", 1, metadata={"payload": "from-metadata"}),
            scripted_step("two", 2, payload={"step": "two"}),
        ]
    )

    with caplog.at_level(logging.WARNING, logger="orchestration.orchestrator"):
        record = await orchestrator.wait_for(await orchestrator.start_orchestration("agent-creation"))

    assert record.status == OrchestrationStatus.COMPLETED
    assert record.result == {"payload": "from-metadata"}
    assert "shadows the final step payload" in caplog.text


@pytest.mark.asyncio
async def test_list_orchestrations_and_id_factory(scripted_step):
    ids = iter(["first", "second"])
    orchestrator = _orchestrator([scripted_step("one", 1)], id_factory=lambda: next(ids))

    first = await orchestrator.start_orchestration("agent-creation")
    second = await orchestrator.start_orchestration("agent-creation")
    await orchestrator.shutdown()

    assert (first, second) == ("first", "second")
    records = await orchestrator.list_orchestrations()
    assert {r.orchestration_id for r in records} == {"first", "second"}
    assert not orchestrator.is_active("first")
