"""Integration tests for orchestration monitoring, workflow and health endpoints."""
import time

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from api.dependencies import get_container_runtime, reset_dependencies

PAYLOAD = {
    "name": "Trader Bot",
    "transaction_hash": "0xpay",
    "agent_config": {"name": "Trader Bot"},
}


def _start(client) -> str:
    response = client.post("/api/v1/agents", json=PAYLOAD)
    assert response.status_code == status.HTTP_202_ACCEPTED
    return response.json()["data"]["orchestration_id"]


def _wait_for(client, orchestration_id, predicate, timeout=10.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        record = client.get(f"/api/v1/orchestrations/{orchestration_id}").json()
        if predicate(record):
            return record
        time.sleep(0.02)
    pytest.fail(f"Orchestration {orchestration_id} did not reach the expected state")


def _terminal(record):
    return record["status"] in ("completed", "failed")


@pytest.fixture
def slow_client(api_env, monkeypatch):
    """Client whose containers never report a runtime identity."""
    from api.main import app

    monkeypatch.setenv("ORCHESTRATION_RUNTIME_POLL_INTERVAL_SECONDS", "5")
    reset_dependencies()
    with TestClient(app) as client:
        get_container_runtime().identity_delay = None
        yield client
    reset_dependencies()


# =============================================================================
# ORCHESTRATIONS
# =============================================================================

class TestListOrchestrations:

    def test_empty(self, test_client):
        response = test_client.get("/api/v1/orchestrations")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"total": 0, "orchestrations": []}

    def test_lists_runs_newest_first(self, test_client):
        first = _start(test_client)
        _wait_for(test_client, first, _terminal)
        second = _start(test_client)
        _wait_for(test_client, second, _terminal)

        body = test_client.get("/api/v1/orchestrations").json()

        assert body["total"] == 2
        assert [o["orchestration_id"] for o in body["orchestrations"]] == [second, first]


class TestGetOrchestration:

    def test_full_record(self, test_client):
        orchestration_id = _start(test_client)

        record = _wait_for(test_client, orchestration_id, _terminal)

        assert record["orchestration_id"] == orchestration_id
        assert record["workflow_type"] == "agent-creation"
        assert record["status"] == "completed"
        assert [s["step_id"] for s in record["step_history"]] == [
            "create-db-record",
            "create-wallet",
            "fund-wallet",
            "deploy-wallet",
            "deploy-agent-token",
            "create-container",
            "start-container",
        ]
        assert all(s["success"] for s in record["step_history"])
        assert all(s["duration_ms"] >= 0 for s in record["step_history"])

    def test_not_found(self, test_client):
        response = test_client.get("/api/v1/orchestrations/missing")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestCancelOrchestration:

    def test_cancel_unknown(self, test_client):
        response = test_client.post("/api/v1/orchestrations/missing/cancel")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_cancel_finished_run_conflicts(self, test_client):
        orchestration_id = _start(test_client)
        _wait_for(test_client, orchestration_id, _terminal)

        response = test_client.post(f"/api/v1/orchestrations/{orchestration_id}/cancel")

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_cancel_waiting_run(self, slow_client):
        orchestration_id = _start(slow_client)
        _wait_for(
            slow_client,
            orchestration_id,
            lambda record: record["current_step_id"] == "start-container",
        )

        response = slow_client.post(f"/api/v1/orchestrations/{orchestration_id}/cancel")

        assert response.status_code == status.HTTP_202_ACCEPTED
        assert response.json() == {"orchestration_id": orchestration_id, "status": "cancelling"}

        record = _wait_for(slow_client, orchestration_id, _terminal)
        assert record["status"] == "failed"
        assert record["error"] == "Orchestration cancelled"
        assert record["current_step_id"] == "start-container"


# =============================================================================
# WORKFLOWS
# =============================================================================

def test_list_workflows(test_client):
    response = test_client.get("/api/v1/workflows")

    assert response.status_code == status.HTTP_200_OK
    workflows = {w["workflow_type"]: w["steps"] for w in response.json()["workflows"]}
    assert set(workflows) == {"agent-creation", "leftcurve-agent-creation"}
    assert [s["priority"] for s in workflows["agent-creation"]] == [1, 2, 3, 4, 5, 6, 7]
    assert [s["step_id"] for s in workflows["leftcurve-agent-creation"]] == [
        "create-db-record",
        "deploy-agent-token",
        "create-container",
        "start-container",
    ]
    assert workflows["agent-creation"][0]["name"] == "Create Database Record"


# =============================================================================
# HEALTH
# =============================================================================

def test_health(test_client):
    response = test_client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "healthy"


def test_readiness(test_client):
    response = test_client.get("/health/ready")

    body = response.json()
    assert body["status"] == "ready"
    assert body["checks"]["status_store"] == "memory"
    assert "agent-creation" in body["checks"]["workflows"]


def test_root(test_client):
    assert test_client.get("/").json()["docs"] == "/docs"
