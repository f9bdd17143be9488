"""Workflow definition and trigger repositories."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from caseflow.application.dtos.workflow import WorkflowTriggerResult
from caseflow.domain.entities.workflow import (
    WorkflowEntity,
    WorkflowStateEntity,
    WorkflowTransitionEntity,
)
from caseflow.infrastructure.persistence.models.workflow import (
    Workflow,
    WorkflowState,
    WorkflowTransition,
    WorkflowTrigger,
)
from caseflow.infrastructure.persistence.repositories.base import BaseRepository


class WorkflowRepository(BaseRepository[Workflow]):
    """Workflow repository. Implements IWorkflowRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Workflow)

    async def get_definition(self, workflow_id: str) -> WorkflowEntity | None:
        """Workflow with its states and transitions in stored order."""
        workflow = await self._get_row(workflow_id)
        if workflow is None:
            return None
        states = await self.db.execute(
            select(WorkflowState)
            .where(WorkflowState.workflow_id == workflow_id)
            .order_by(WorkflowState.position.asc(), WorkflowState.created_at.asc())
        )
        transitions = await self.db.execute(
            select(WorkflowTransition)
            .where(WorkflowTransition.workflow_id == workflow_id)
            .order_by(
                WorkflowTransition.position.asc(),
                WorkflowTransition.created_at.asc(),
            )
        )
        return WorkflowEntity(
            id=workflow.id,
            key=workflow.key,
            name=workflow.name,
            version=workflow.version,
            definition=workflow.definition,
            states=tuple(
                WorkflowStateEntity(key=s.key, name=s.name, is_terminal=s.is_terminal)
                for s in states.scalars().all()
            ),
            transitions=tuple(
                WorkflowTransitionEntity(
                    from_state_key=t.from_state_key, to_state_key=t.to_state_key
                )
                for t in transitions.scalars().all()
            ),
        )

    async def create_workflow(
        self,
        key: str,
        name: str,
        states: Sequence[str | tuple[str, str]],
        transitions: Sequence[tuple[str, str]],
        definition: dict[str, Any] | None = None,
        version: int = 1,
    ) -> Workflow:
        """Create a workflow with its states and transitions.

        states: state keys, or (key, name) pairs. States and transitions keep the
        order given (position = index); transition order decides which edge
        advance() follows.
        """
        workflow = Workflow(key=key, name=name, version=version, definition=definition)
        for position, state in enumerate(states):
            state_key, state_name = (state, state) if isinstance(state, str) else state
            workflow.states.append(
                WorkflowState(key=state_key, name=state_name, position=position)
            )
        for position, (from_key, to_key) in enumerate(transitions):
            workflow.transitions.append(
                WorkflowTransition(
                    from_state_key=from_key, to_state_key=to_key, position=position
                )
            )
        return await self._add(workflow)


def _trigger_to_result(row: WorkflowTrigger, definition: Any) -> WorkflowTriggerResult:
    return WorkflowTriggerResult(
        id=row.id,
        tenant_id=row.tenant_id,
        subject_schema=row.subject_schema,
        subject_model=row.subject_model,
        event_key=row.event_key,
        active=row.active,
        workflow_id=row.workflow_id,
        workflow_definition=definition,
    )


class WorkflowTriggerRepository(BaseRepository[WorkflowTrigger]):
    """Workflow trigger repository. Implements IWorkflowTriggerRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, WorkflowTrigger)

    async def find_active(
        self,
        tenant_id: str | None,
        subject_schema: str | None,
        subject_model: str | None,
        event_key: str,
    ) -> list[WorkflowTriggerResult]:
        """Active triggers for (tenant, subject, event); a null tenant only matches null."""
        if not subject_schema or not subject_model:
            return []
        tenant_clause = (
            WorkflowTrigger.tenant_id.is_(None)
            if tenant_id is None
            else WorkflowTrigger.tenant_id == tenant_id
        )
        stmt = (
            select(WorkflowTrigger, Workflow.definition)
            .join(Workflow, Workflow.id == WorkflowTrigger.workflow_id)
            .where(
                tenant_clause,
                WorkflowTrigger.subject_schema == subject_schema,
                WorkflowTrigger.subject_model == subject_model,
                WorkflowTrigger.event_key == event_key,
                WorkflowTrigger.active.is_(True),
            )
            .order_by(WorkflowTrigger.created_at.asc(), WorkflowTrigger.id.asc())
        )
        result = await self.db.execute(stmt)
        return [_trigger_to_result(row, definition) for row, definition in result.all()]

    async def create_trigger(
        self,
        workflow_id: str,
        subject_schema: str,
        subject_model: str,
        event_key: str,
        tenant_id: str | None = None,
        active: bool = True,
    ) -> WorkflowTriggerResult:
        """Create trigger; return created record."""
        row = await self._add(
            WorkflowTrigger(
                workflow_id=workflow_id,
                subject_schema=subject_schema,
                subject_model=subject_model,
                event_key=event_key,
                tenant_id=tenant_id,
                active=active,
            )
        )
        definition = await self.db.scalar(
            select(Workflow.definition).where(Workflow.id == workflow_id)
        )
        return _trigger_to_result(row, definition)
