"""
SQLAlchemy Status Store Implementation.

Implements the StatusStore protocol on the ``orchestrations`` table, so run
status survives process restarts and can be read by other instances.
"""
from datetime import datetime, timezone
from typing import List, Optional
import logging

from pydantic_core import to_jsonable_python
from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.domain.enums.orchestration_status import OrchestrationStatus
from core.infrastructure.database.models import OrchestrationModel
from orchestration.exceptions import DuplicateOrchestrationError, OrchestrationNotFound
from orchestration.models import OrchestrationRecord, StepRecord
from orchestration.store import StatusStore


logger = logging.getLogger(__name__)


def _aware(value: datetime) -> datetime:
    # SQLite drops the offset; stored values are always UTC
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class SqlAlchemyStatusStore(StatusStore):
    """
    SQLAlchemy implementation of StatusStore.

    Each call runs in its own session and transaction.
    """

    def __init__(self, session_factory: async_sessionmaker):
        """
        Initialize store with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory

    async def create(self, record: OrchestrationRecord) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                if await session.get(OrchestrationModel, record.orchestration_id) is not None:
                    raise DuplicateOrchestrationError(record.orchestration_id)
                session.add(self._to_model(record))
        logger.debug(f"Created record {record.orchestration_id} ({record.workflow_type})")

    async def get(self, orchestration_id: str) -> Optional[OrchestrationRecord]:
        async with self._session_factory() as session:
            model = await session.get(OrchestrationModel, orchestration_id)
            return self._to_record(model) if model is not None else None

    async def replace(self, record: OrchestrationRecord) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                model = await session.get(OrchestrationModel, record.orchestration_id)
                if model is None:
                    raise OrchestrationNotFound(record.orchestration_id)

                self._to_record(model).check_successor(record)

                model.status = record.status.value
                model.progress = record.progress
                model.current_step_id = record.current_step_id
                model.error = record.error
                model.result = to_jsonable_python(record.result)
                model.step_history = [step.to_dict() for step in record.step_history]
                model.updated_at = record.updated_at

    async def list_records(self) -> List[OrchestrationRecord]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(OrchestrationModel).order_by(OrchestrationModel.created_at.desc())
            )
            return [self._to_record(model) for model in result.scalars().all()]

    @staticmethod
    def _to_model(record: OrchestrationRecord) -> OrchestrationModel:
        return OrchestrationModel(
            orchestration_id=record.orchestration_id,
            workflow_type=record.workflow_type,
            status=record.status.value,
            progress=record.progress,
            current_step_id=record.current_step_id,
            error=record.error,
            result=to_jsonable_python(record.result),
            step_history=[step.to_dict() for step in record.step_history],
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    @staticmethod
    def _to_record(model: OrchestrationModel) -> OrchestrationRecord:
        return OrchestrationRecord(
            orchestration_id=model.orchestration_id,
            workflow_type=model.workflow_type,
            status=OrchestrationStatus(model.status),
            progress=model.progress,
            current_step_id=model.current_step_id,
            result=model.result,
            error=model.error,
            step_history=tuple(StepRecord.from_dict(raw) for raw in model.step_history or []),
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
        )
