"""Repository implementations of the application-layer ports."""

from caseflow.infrastructure.persistence.repositories.audit_log_repo import (
    AuditLogRepository,
)
from caseflow.infrastructure.persistence.repositories.base import BaseRepository
from caseflow.infrastructure.persistence.repositories.outbox_repo import (
    OutboxRepository,
)
from caseflow.infrastructure.persistence.repositories.workflow_instance_repo import (
    WorkflowInstanceRepository,
)
from caseflow.infrastructure.persistence.repositories.workflow_repo import (
    WorkflowRepository,
    WorkflowTriggerRepository,
)

__all__ = [
    "AuditLogRepository",
    "BaseRepository",
    "OutboxRepository",
    "WorkflowInstanceRepository",
    "WorkflowRepository",
    "WorkflowTriggerRepository",
]
