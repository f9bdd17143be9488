"""Presentation-layer dependency injection (composition root).

Reads use get_db (no commit); writes use get_db_transactional so a state
change and its audit entry commit or roll back together.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from caseflow.application.use_cases.workflows import WorkflowService
from caseflow.infrastructure.persistence.database import get_db, get_db_transactional
from caseflow.infrastructure.persistence.repositories import AuditLogRepository
from caseflow.infrastructure.services.composition import build_workflow_service


async def get_workflow_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WorkflowService:
    """WorkflowService for read operations (get instance)."""
    return build_workflow_service(db)


async def get_workflow_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> WorkflowService:
    """WorkflowService for start/advance (transactional)."""
    return build_workflow_service(db)


async def get_audit_log_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuditLogRepository:
    return AuditLogRepository(db)
