"""Application ports (repository and service Protocols)."""

from caseflow.application.interfaces.repositories import (
    IAuditLogRepository,
    IOutboxRepository,
    IWorkflowInstanceRepository,
    IWorkflowRepository,
    IWorkflowTriggerRepository,
)
from caseflow.application.interfaces.services import (
    IAuditRecorder,
    IDomainEventHandler,
    IWorkflowService,
)

__all__ = [
    "IAuditLogRepository",
    "IAuditRecorder",
    "IDomainEventHandler",
    "IOutboxRepository",
    "IWorkflowInstanceRepository",
    "IWorkflowRepository",
    "IWorkflowService",
    "IWorkflowTriggerRepository",
]
