"""Tests for StepRegistry."""

import logging

import pytest

from orchestration.exceptions import DuplicateStepError, UnknownWorkflowType
from orchestration.registry import StepRegistry
from orchestration.step import StepExecutor


def test_steps_grouped_by_type_and_sorted_by_priority(scripted_step):
    registry = StepRegistry(
        [
            scripted_step("start-container", 7),
            scripted_step("create-db-record", 1),
            scripted_step("deploy-agent-token", 5, workflow_type="leftcurve-agent-creation"),
            scripted_step("create-container", 6),
        ]
    )

    assert registry.workflow_types() == ["agent-creation", "leftcurve-agent-creation"]
    assert [s.descriptor.step_id for s in registry.steps_for("agent-creation")] == [
        "create-db-record",
        "create-container",
        "start-container",
    ]
    assert "leftcurve-agent-creation" in registry
    assert "bogus-type" not in registry


def test_unknown_type_raises(scripted_step):
    registry = StepRegistry([scripted_step("one", 1)])

    with pytest.raises(UnknownWorkflowType) as exc_info:
        registry.steps_for("bogus-type")

    assert exc_info.value.workflow_type == "bogus-type"


def test_duplicate_step_id_rejected(scripted_step):
    with pytest.raises(DuplicateStepError):
        StepRegistry([scripted_step("one", 1), scripted_step("one", 2)])


def test_shared_priority_runs_in_registration_order(scripted_step, caplog):
    with caplog.at_level(logging.WARNING, logger="orchestration.registry"):
        registry = StepRegistry(
            [
                scripted_step("create-container", 2),
                scripted_step("create-db-record", 1),
                scripted_step("create-wallet", 2),
            ]
        )

    assert [s.descriptor.step_id for s in registry.steps_for("agent-creation")] == [
        "create-db-record",
        "create-container",
        "create-wallet",
    ]
    assert "share priority 2" in caplog.text


def test_shared_priority_order_follows_registration(scripted_step):
    registry = StepRegistry([scripted_step("create-wallet", 2), scripted_step("create-container", 2)])

    assert [s.descriptor.step_id for s in registry.steps_for("agent-creation")] == [
        "create-wallet",
        "create-container",
    ]


def test_same_step_id_allowed_across_types(scripted_step):
    registry = StepRegistry(
        [
            scripted_step("create-db-record", 1),
            scripted_step("create-db-record", 1, workflow_type="leftcurve-agent-creation"),
        ]
    )

    assert len(registry.steps_for("leftcurve-agent-creation")) == 1


def test_describe_and_protocol(scripted_step):
    step = scripted_step("one", 1)
    registry = StepRegistry([step])

    assert isinstance(step, StepExecutor)
    descriptors = registry.describe("agent-creation")
    assert descriptors[0].to_dict()["step_id"] == "one"
    assert descriptors[0].to_dict()["name"] == "one"
