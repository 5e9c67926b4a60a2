"""Status store - StatusStore protocol and InMemoryStatusStore."""

import threading
from typing import Dict, List, Optional, Protocol

from core.infrastructure.logging import get_logger

from .exceptions import DuplicateOrchestrationError, OrchestrationNotFound
from .models import OrchestrationRecord


class StatusStore(Protocol):
    """Protocol for status store implementations.

    One writer (the run's background task) and many readers per record.
    Records are replaced whole so readers never see a partial update.
    """

    async def create(self, record: OrchestrationRecord) -> None:
        """Store a new pending record.

        Raises:
            DuplicateOrchestrationError: If the id already exists
        """
        ...

    async def get(self, orchestration_id: str) -> Optional[OrchestrationRecord]:
        """Return the current snapshot, or None if the id is unknown."""
        ...

    async def replace(self, record: OrchestrationRecord) -> None:
        """Swap in the next snapshot of an existing record.

        Raises:
            OrchestrationNotFound: If the id is unknown
            InvalidStatusTransition: If the update breaks the state machine
        """
        ...

    async def list_records(self) -> List[OrchestrationRecord]:
        """Return all records, newest first."""
        ...


class InMemoryStatusStore(StatusStore):
    """In-memory status store for single-process deployments."""

    def __init__(self) -> None:
        self._records: Dict[str, OrchestrationRecord] = {}
        self._lock = threading.Lock()
        self._logger = get_logger("orchestration.store")

    async def create(self, record: OrchestrationRecord) -> None:
        with self._lock:
            if record.orchestration_id in self._records:
                raise DuplicateOrchestrationError(record.orchestration_id)
            self._records[record.orchestration_id] = record
        self._logger.debug(f"Created record {record.orchestration_id} ({record.workflow_type})")

    async def get(self, orchestration_id: str) -> Optional[OrchestrationRecord]:
        with self._lock:
            return self._records.get(orchestration_id)

    async def replace(self, record: OrchestrationRecord) -> None:
        with self._lock:
            current = self._records.get(record.orchestration_id)
            if current is None:
                raise OrchestrationNotFound(record.orchestration_id)
            current.check_successor(record)
            self._records[record.orchestration_id] = record

    async def list_records(self) -> List[OrchestrationRecord]:
        with self._lock:
            records = list(self._records.values())
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def clear(self) -> None:
        """Clear all records (for testing)."""
        with self._lock:
            self._records.clear()
