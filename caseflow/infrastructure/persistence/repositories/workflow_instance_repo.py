"""Workflow instance repository. Implements IWorkflowInstanceRepository."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from caseflow.application.dtos.workflow import (
    WorkflowInstanceCreate,
    WorkflowInstanceResult,
)
from caseflow.domain.exceptions import ResourceNotFoundException
from caseflow.infrastructure.persistence.models.workflow import WorkflowInstance
from caseflow.infrastructure.persistence.repositories.base import BaseRepository
from caseflow.shared.utils.datetime import ensure_utc, utc_now


def _orm_to_result(row: WorkflowInstance) -> WorkflowInstanceResult:
    """Map ORM to application DTO."""
    return WorkflowInstanceResult(
        id=row.id,
        workflow_id=row.workflow_id,
        tenant_id=row.tenant_id,
        subject_schema=row.subject_schema,
        subject_model=row.subject_model,
        subject_id=row.subject_id,
        state_key=row.state_key,
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
    )


class WorkflowInstanceRepository(BaseRepository[WorkflowInstance]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, WorkflowInstance)

    async def create(self, data: WorkflowInstanceCreate) -> WorkflowInstanceResult:
        row = await self._add(
            WorkflowInstance(
                workflow_id=data.workflow_id,
                tenant_id=data.tenant_id,
                subject_schema=data.subject_schema,
                subject_model=data.subject_model,
                subject_id=data.subject_id,
                state_key=data.state_key,
            )
        )
        return _orm_to_result(row)

    async def get_by_id(
        self, instance_id: str, *, for_update: bool = False
    ) -> WorkflowInstanceResult | None:
        row = await self._get_row(instance_id, for_update=for_update)
        return _orm_to_result(row) if row else None

    async def update_state(
        self, instance_id: str, state_key: str
    ) -> WorkflowInstanceResult:
        """Set state_key and touch updated_at; raises if the instance is gone."""
        row = await self._get_row(instance_id)
        if row is None:
            raise ResourceNotFoundException("workflow_instance", instance_id)
        row.state_key = state_key
        row.updated_at = utc_now()
        await self.db.flush()
        await self.db.refresh(row)
        return _orm_to_result(row)
