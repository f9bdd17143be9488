"""Base repository: generic get/create for CUID-keyed models."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from caseflow.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id and create.

    Subclasses map ORM rows to application DTOs at their public boundary;
    the ORM objects returned here stay inside the infrastructure layer.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_row(
        self, entity_id: str, *, for_update: bool = False
    ) -> ModelType | None:
        """Return a single record by primary key, or None.

        for_update takes a row lock (SELECT ... FOR UPDATE) held until the
        surrounding transaction ends; dialects without row locks ignore it.
        populate_existing re-reads rows already in the session, which may be
        stale after bulk UPDATE statements.
        """
        model: Any = self.model
        stmt = (
            select(self.model)
            .where(model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def _add(self, obj: ModelType) -> ModelType:
        """Persist a new record and return it with server defaults loaded."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj
