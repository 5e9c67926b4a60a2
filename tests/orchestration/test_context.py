"""Tests for ExecutionContext and result builders."""

import pytest

from orchestration.models import ExecutionContext
from orchestration.step import failure, success


def test_data_is_a_read_only_copy():
    original = {"name": "Bot", "agent_config": {"bio": "x"}}
    context = ExecutionContext("o-1", "agent-creation", original)

    original["agent_config"]["bio"] = "changed"

    assert context.data["agent_config"]["bio"] == "x"
    with pytest.raises(TypeError):
        context.data["name"] = "Other"


def test_metadata_grows_only_through_merge():
    context = ExecutionContext("o-1", "agent-creation", {})

    with pytest.raises(TypeError):
        context.metadata["agent_id"] = "a1"

    context.merge({"agent_id": "a1"})
    context.merge({"container_id": "c1"})
    context.merge(None)

    assert dict(context.metadata) == {"agent_id": "a1", "container_id": "c1"}
    snapshot = context.snapshot()
    snapshot["agent_id"] = "other"
    assert context.metadata["agent_id"] == "a1"


def test_result_builders():
    ok = success({"id": "a1"}, {"agent_id": "a1"})
    bad = failure("Missing agent name")

    assert ok.success is True
    assert ok.metadata == {"agent_id": "a1"}
    assert ok.error is None
    assert bad.success is False
    assert bad.error == "Missing agent name"
    assert bad.metadata == {}
