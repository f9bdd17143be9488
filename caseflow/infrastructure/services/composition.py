"""Wiring of repositories and services for one database session.

Used by the HTTP dependencies, the outbox poller and the scripts so every
caller builds the same object graph.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from caseflow.application.services.audit_recorder import AuditRecorder
from caseflow.application.use_cases.outbox import DrainOutboxUseCase
from caseflow.application.use_cases.triggers import TriggerService
from caseflow.application.use_cases.workflows import WorkflowService
from caseflow.core.config import Settings, get_settings
from caseflow.infrastructure.persistence.repositories import (
    AuditLogRepository,
    OutboxRepository,
    WorkflowInstanceRepository,
    WorkflowRepository,
    WorkflowTriggerRepository,
)


def build_workflow_service(session: AsyncSession) -> WorkflowService:
    """WorkflowService whose writes and audit entries share session's transaction."""
    return WorkflowService(
        workflow_repo=WorkflowRepository(session),
        instance_repo=WorkflowInstanceRepository(session),
        audit_recorder=AuditRecorder(AuditLogRepository(session)),
    )


def build_trigger_service(session: AsyncSession) -> TriggerService:
    return TriggerService(
        trigger_repo=WorkflowTriggerRepository(session),
        workflow_service=build_workflow_service(session),
    )


def build_drain_use_case(
    session: AsyncSession, settings: Settings | None = None
) -> DrainOutboxUseCase:
    """Drain use case for one cycle; each dispatch runs in a SAVEPOINT of session."""
    settings = settings or get_settings()
    return DrainOutboxUseCase(
        OutboxRepository(session),
        build_trigger_service(session),
        max_attempts=settings.outbox_max_attempts,
        retry_backoff_seconds=settings.outbox_retry_backoff_seconds,
        retry_backoff_max_seconds=settings.outbox_retry_backoff_max_seconds,
        dispatch_scope=session.begin_nested,
    )
