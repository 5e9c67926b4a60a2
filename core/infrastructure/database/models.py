"""
SQLAlchemy ORM Models.

Maps orchestration records to database tables.
"""
from sqlalchemy import JSON, Column, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import declarative_base


Base = declarative_base()


# =============================================================================
# ORCHESTRATION MODEL
# =============================================================================

class OrchestrationModel(Base):
    """
    Orchestration record model.

    One row per run, rewritten in place on every transition.
    """

    __tablename__ = "orchestrations"

    orchestration_id = Column(String(64), primary_key=True)
    workflow_type = Column(String(100), nullable=False, index=True)

    # Status
    status = Column(String(20), nullable=False, index=True)
    progress = Column(Integer, nullable=False, default=0)
    current_step_id = Column(String(100), nullable=True)
    error = Column(Text, nullable=True)

    # Accumulated metadata + final payload, and per-step history (JSON)
    result = Column(JSON, nullable=True)
    step_history = Column(JSON, nullable=False, default=list)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_orchestrations_created_at", "created_at"),
    )

    def __repr__(self):
        return (
            f"<OrchestrationModel(id={self.orchestration_id}, "
            f"type={self.workflow_type}, status={self.status})>"
        )
