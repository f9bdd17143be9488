"""Outbox event ORM model. Domain events awaiting dispatch to workflow triggers."""

from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlalchemy import JSON, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from caseflow.infrastructure.persistence.database import Base
from caseflow.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    OptionalTenantMixin,
)


class OutboxEvent(CuidMixin, OptionalTenantMixin, CreatedAtMixin, Base):
    """Outbox row. Table: outbox_event. Appended by business modules, mutated only by the drain."""

    __tablename__ = "outbox_event"

    topic: Mapped[str] = mapped_column(String, nullable=False, index=True)
    payload: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    processed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    attempts: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )
    last_error: Mapped[str | None] = mapped_column(Text, nullable=True)
    available_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    dead_lettered_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index("ix_outbox_event_pending", "processed_at", "dead_lettered_at", "created_at"),
    )
