"""Outbox repository. Implements IOutboxRepository."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from caseflow.application.dtos.outbox import OutboxEventResult
from caseflow.infrastructure.persistence.models.outbox_event import OutboxEvent
from caseflow.infrastructure.persistence.repositories.base import BaseRepository
from caseflow.shared.utils.datetime import ensure_utc, utc_now


def _orm_to_result(row: OutboxEvent) -> OutboxEventResult:
    """Map ORM to application DTO."""
    return OutboxEventResult(
        id=row.id,
        tenant_id=row.tenant_id,
        topic=row.topic,
        payload=row.payload,
        created_at=ensure_utc(row.created_at),
        processed_at=ensure_utc(row.processed_at),
        attempts=row.attempts,
        last_error=row.last_error,
        available_at=ensure_utc(row.available_at),
        dead_lettered_at=ensure_utc(row.dead_lettered_at),
    )


class OutboxRepository(BaseRepository[OutboxEvent]):
    """Outbox store. Writers append; only the drain marks rows processed or failed."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, OutboxEvent)

    async def append(
        self,
        topic: str,
        payload: dict[str, Any] | None,
        tenant_id: str | None = None,
    ) -> OutboxEventResult:
        """Append one unprocessed event in the caller's transaction."""
        row = await self._add(
            OutboxEvent(topic=topic, payload=payload, tenant_id=tenant_id)
        )
        return _orm_to_result(row)

    async def get_by_id(self, event_id: str) -> OutboxEventResult | None:
        row = await self._get_row(event_id)
        return _orm_to_result(row) if row else None

    async def list_unprocessed(
        self, limit: int, now: datetime | None = None
    ) -> list[OutboxEventResult]:
        """Oldest-first batch of pending events.

        Rows are claimed with FOR UPDATE SKIP LOCKED so concurrent drains on
        other processes never pick the same event; the lock lasts until the
        drain's transaction commits.
        """
        now = now or utc_now()
        stmt = (
            select(OutboxEvent)
            .where(
                OutboxEvent.processed_at.is_(None),
                OutboxEvent.dead_lettered_at.is_(None),
                or_(
                    OutboxEvent.available_at.is_(None),
                    OutboxEvent.available_at <= now,
                ),
            )
            .order_by(OutboxEvent.created_at.asc(), OutboxEvent.id.asc())
            .limit(limit)
            .with_for_update(skip_locked=True)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return [_orm_to_result(r) for r in result.scalars().all()]

    async def mark_processed(self, event_id: str) -> None:
        """Set processed_at and bump attempts; last_error from an earlier failure is kept."""
        await self.db.execute(
            update(OutboxEvent)
            .where(OutboxEvent.id == event_id)
            .values(
                processed_at=utc_now(),
                attempts=OutboxEvent.attempts + 1,
                available_at=None,
            )
            .execution_options(synchronize_session=False)
        )

    async def mark_failed(
        self,
        event_id: str,
        error: str,
        *,
        next_attempt_at: datetime | None = None,
        dead_letter: bool = False,
    ) -> None:
        """Bump attempts and record the error; processed_at stays null."""
        values: dict[str, Any] = {
            "attempts": OutboxEvent.attempts + 1,
            "last_error": error,
            "available_at": next_attempt_at,
        }
        if dead_letter:
            values["dead_lettered_at"] = utc_now()
        await self.db.execute(
            update(OutboxEvent)
            .where(OutboxEvent.id == event_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
