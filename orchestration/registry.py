"""Step registry - immutable table of workflow types to ordered steps."""

from collections import defaultdict
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

from core.infrastructure.logging import get_logger

from .exceptions import DuplicateStepError, UnknownWorkflowType
from .step import StepDescriptor, StepExecutor


class StepRegistry:
    """Groups steps by workflow type, each group sorted by ascending priority.

    Built once at startup; there is no runtime registration. Steps sharing a
    priority run in registration order. A clashing step id within one workflow
    type fails construction.
    """

    def __init__(self, steps: Iterable[StepExecutor]) -> None:
        self._logger = get_logger("orchestration.registry")

        grouped: Dict[str, List[StepExecutor]] = defaultdict(list)
        for step in steps:
            grouped[step.descriptor.workflow_type].append(step)

        table: Dict[str, Tuple[StepExecutor, ...]] = {}
        for workflow_type, group in grouped.items():
            self._validate(workflow_type, group)
            table[workflow_type] = tuple(sorted(group, key=lambda s: s.descriptor.priority))
            self._logger.info(
                f"Registered workflow '{workflow_type}': "
                f"{[s.descriptor.step_id for s in table[workflow_type]]}"
            )

        self._table: Mapping[str, Tuple[StepExecutor, ...]] = MappingProxyType(table)

    def _validate(self, workflow_type: str, group: List[StepExecutor]) -> None:
        seen_ids = set()
        seen_priorities: Dict[int, str] = {}
        for step in group:
            descriptor = step.descriptor
            if descriptor.step_id in seen_ids:
                raise DuplicateStepError(
                    f"Step {descriptor.step_id} of type {workflow_type} is already registered"
                )
            seen_ids.add(descriptor.step_id)

            if descriptor.priority in seen_priorities:
                self._logger.warning(
                    f"Steps {seen_priorities[descriptor.priority]} and {descriptor.step_id} "
                    f"of type {workflow_type} share priority {descriptor.priority}; "
                    f"running them in registration order"
                )
            else:
                seen_priorities[descriptor.priority] = descriptor.step_id

    def __contains__(self, workflow_type: object) -> bool:
        return workflow_type in self._table

    def workflow_types(self) -> List[str]:
        return sorted(self._table)

    def steps_for(self, workflow_type: str) -> Tuple[StepExecutor, ...]:
        """Return the steps of a workflow type in execution order.

        Raises:
            UnknownWorkflowType: If no steps are registered for the type
        """
        try:
            return self._table[workflow_type]
        except KeyError:
            raise UnknownWorkflowType(workflow_type) from None

    def describe(self, workflow_type: str) -> List[StepDescriptor]:
        return [step.descriptor for step in self.steps_for(workflow_type)]
