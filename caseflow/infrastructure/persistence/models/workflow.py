"""Workflow definition, trigger and instance ORM models."""

from typing import Any

import sqlalchemy as sa
from sqlalchemy import (
    JSON,
    Boolean,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from caseflow.infrastructure.persistence.database import Base
from caseflow.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    OptionalTenantMixin,
    TimestampMixin,
)


class Workflow(CuidMixin, TimestampMixin, Base):
    """Workflow definition. Table: workflow. definition["entry"] names the entry state."""

    __tablename__ = "workflow"

    key: Mapped[str] = mapped_column(String, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, server_default=sa.text("1")
    )
    definition: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    # Read paths load states/transitions with explicit ORDER BY (see WorkflowRepository).
    states: Mapped[list["WorkflowState"]] = relationship(
        back_populates="workflow", cascade="all, delete-orphan"
    )
    transitions: Mapped[list["WorkflowTransition"]] = relationship(
        back_populates="workflow", cascade="all, delete-orphan"
    )


class WorkflowState(CuidMixin, CreatedAtMixin, Base):
    """Named state of a workflow. Table: workflow_state. position = declaration order."""

    __tablename__ = "workflow_state"

    workflow_id: Mapped[str] = mapped_column(
        String, ForeignKey("workflow.id", ondelete="CASCADE"), nullable=False, index=True
    )
    key: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    is_terminal: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=sa.false()
    )
    position: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )

    workflow: Mapped[Workflow] = relationship(back_populates="states")

    __table_args__ = (
        UniqueConstraint("workflow_id", "key", name="uq_workflow_state_workflow_key"),
    )


class WorkflowTransition(CuidMixin, CreatedAtMixin, Base):
    """Directed edge between two state keys. Table: workflow_transition. position = stored order."""

    __tablename__ = "workflow_transition"

    workflow_id: Mapped[str] = mapped_column(
        String, ForeignKey("workflow.id", ondelete="CASCADE"), nullable=False, index=True
    )
    from_state_key: Mapped[str] = mapped_column(String, nullable=False)
    to_state_key: Mapped[str] = mapped_column(String, nullable=False)
    position: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )

    workflow: Mapped[Workflow] = relationship(back_populates="transitions")


class WorkflowTrigger(CuidMixin, OptionalTenantMixin, CreatedAtMixin, Base):
    """Standing subscription: event shape -> workflow. Table: workflow_trigger."""

    __tablename__ = "workflow_trigger"

    subject_schema: Mapped[str] = mapped_column(String, nullable=False)
    subject_model: Mapped[str] = mapped_column(String, nullable=False)
    event_key: Mapped[str] = mapped_column(String, nullable=False)
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=sa.true()
    )
    workflow_id: Mapped[str] = mapped_column(
        String, ForeignKey("workflow.id", ondelete="CASCADE"), nullable=False, index=True
    )

    workflow: Mapped[Workflow] = relationship()

    __table_args__ = (
        Index(
            "ix_workflow_trigger_match",
            "event_key",
            "subject_schema",
            "subject_model",
        ),
    )


class WorkflowInstance(CuidMixin, OptionalTenantMixin, TimestampMixin, Base):
    """One execution of a workflow against one subject. Table: workflow_instance."""

    __tablename__ = "workflow_instance"

    workflow_id: Mapped[str] = mapped_column(
        String, ForeignKey("workflow.id"), nullable=False, index=True
    )
    subject_schema: Mapped[str] = mapped_column(String, nullable=False)
    subject_model: Mapped[str] = mapped_column(String, nullable=False)
    subject_id: Mapped[str] = mapped_column(String, nullable=False)
    state_key: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (
        Index(
            "ix_workflow_instance_subject",
            "subject_schema",
            "subject_model",
            "subject_id",
        ),
    )
