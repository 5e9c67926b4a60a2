"""End-to-end runs of the agent creation workflows against the mock adapters."""

import pytest
import pytest_asyncio

from core.application.workflows import (
    AGENT_CREATION,
    LEFTCURVE_AGENT_CREATION,
    AgentCreationDependencies,
    build_registry,
)
from core.domain.enums.agent_status import AgentStatus
from core.domain.enums.orchestration_status import OrchestrationStatus
from core.domain.enums.transaction_status import TransactionStatus
from orchestration import InMemoryStatusStore, Orchestrator, PollPolicy

FAST = PollPolicy(interval_seconds=0, max_attempts=5)


@pytest.fixture
def deps(agents, wallets, tokens, chain, runtime, wallet_service, token_deployer, blob_store, fake_sleep):
    return AgentCreationDependencies(
        agents=agents,
        wallets=wallets,
        tokens=tokens,
        chain=chain,
        runtime=runtime,
        wallet_service=wallet_service,
        token_deployer=token_deployer,
        blob_store=blob_store,
        payment_poll_policy=FAST,
        runtime_poll_policy=FAST,
        sleep=fake_sleep,
    )


@pytest_asyncio.fixture
async def orchestrator(deps):
    orchestrator = Orchestrator(build_registry(deps), InMemoryStatusStore())
    yield orchestrator
    await orchestrator.shutdown(cancel_running=True)


def _input(**overrides):
    data = {
        "name": "Trader Bot",
        "transaction_hash": "0xpay",
        "creator_wallet": "0xcreator",
        "agent_config": {"name": "Trader Bot", "interval": 30},
    }
    data.update(overrides)
    return data


def test_registry_contains_both_workflows(deps):
    registry = build_registry(deps)

    assert [s.descriptor.step_id for s in registry.steps_for(AGENT_CREATION)] == [
        "create-db-record",
        "create-wallet",
        "fund-wallet",
        "deploy-wallet",
        "deploy-agent-token",
        "create-container",
        "start-container",
    ]
    assert [s.descriptor.step_id for s in registry.steps_for(LEFTCURVE_AGENT_CREATION)] == [
        "create-db-record",
        "deploy-agent-token",
        "create-container",
        "start-container",
    ]


@pytest.mark.asyncio
async def test_agent_creation_runs_to_completion(orchestrator, agents, wallets, tokens, runtime):
    orchestration_id = await orchestrator.start_orchestration(AGENT_CREATION, _input())

    record = await orchestrator.wait_for(orchestration_id)

    assert record.status == OrchestrationStatus.COMPLETED
    assert record.progress == 100
    assert record.current_step_id == "start-container"
    assert len(record.step_history) == 7
    assert all(step.success for step in record.step_history)

    result = record.result
    agent = await agents.find_by_id(result["agent_id"])
    wallet = await wallets.find_by_agent_id(agent.id)
    token = await tokens.find_by_agent_id(agent.id)

    assert agent.status == AgentStatus.RUNNING
    assert agent.runtime_agent_id == result["runtime_agent_id"]
    assert agent.container_id == result["container_id"]
    assert result["wallet_address"] == wallet.contract_address
    assert result["fund_transaction_hash"] == wallet.fund_transaction_hash
    assert result["token_address"] == token.contract_address
    assert result["token_symbol"] == "TRADE"
    assert result["agent"] == {"id": agent.id, "name": "Trader Bot"}
    assert result["payload"]["runtime_agent_id"] == agent.runtime_agent_id
    assert runtime.containers[agent.container_id]["spec"].starknet_address == wallet.contract_address


@pytest.mark.asyncio
async def test_leftcurve_workflow_skips_wallet(orchestrator, agents, wallets, wallet_service, runtime):
    orchestration_id = await orchestrator.start_orchestration(LEFTCURVE_AGENT_CREATION, _input())

    record = await orchestrator.wait_for(orchestration_id)

    assert record.status == OrchestrationStatus.COMPLETED
    assert [step.step_id for step in record.step_history] == [
        "create-db-record",
        "deploy-agent-token",
        "create-container",
        "start-container",
    ]
    assert "wallet_address" not in record.result
    assert await wallets.find_by_agent_id(record.result["agent_id"]) is None
    assert wallet_service.funded == []
    spec = runtime.containers[record.result["container_id"]]["spec"]
    assert spec.starknet_address is None


@pytest.mark.asyncio
async def test_rejected_payment_stops_at_first_step(orchestrator, chain, agents, wallet_service):
    chain.script("0xpay", [TransactionStatus.REJECTED])
    orchestration_id = await orchestrator.start_orchestration(AGENT_CREATION, _input())

    record = await orchestrator.wait_for(orchestration_id)

    assert record.status == OrchestrationStatus.FAILED
    assert record.current_step_id == "create-db-record"
    assert record.error == "Deployment payment transaction was rejected"
    assert record.progress == 0
    assert record.result is None
    assert await agents.find_all() == []
    assert wallet_service.funded == []


@pytest.mark.asyncio
async def test_runtime_never_ready_fails_last_step(deps, agents):
    deps.runtime.identity_delay = None
    orchestrator = Orchestrator(build_registry(deps), InMemoryStatusStore())

    orchestration_id = await orchestrator.start_orchestration(AGENT_CREATION, _input())
    record = await orchestrator.wait_for(orchestration_id)

    assert record.status == OrchestrationStatus.FAILED
    assert record.current_step_id == "start-container"
    assert record.error == "Could not retrieve runtime agent ID"
    assert record.progress == 6 * 100 // 7
    [agent] = await agents.find_all()
    assert agent.status == AgentStatus.STARTING
    assert agent.container_id is not None


@pytest.mark.asyncio
async def test_picture_is_filed_under_agent_id(orchestrator, agents, blob_store):
    temp_name = await blob_store.upload_temp_file("me.gif", b"GIF89a")
    orchestration_id = await orchestrator.start_orchestration(
        AGENT_CREATION, _input(profile_picture=temp_name)
    )

    record = await orchestrator.wait_for(orchestration_id)

    agent = await agents.find_by_id(record.result["agent_id"])
    assert agent.profile_picture == f"{agent.id}.gif"
    assert blob_store.exists(agent.profile_picture)
