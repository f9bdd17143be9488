"""Application DTOs (no ORM dependency)."""

from caseflow.application.dtos.audit_log import AuditLogEntryCreate, AuditLogResult
from caseflow.application.dtos.outbox import (
    DispatchResult,
    DrainResult,
    OutboxEventResult,
)
from caseflow.application.dtos.workflow import (
    WorkflowInstanceCreate,
    WorkflowInstanceResult,
    WorkflowTriggerResult,
)

__all__ = [
    "AuditLogEntryCreate",
    "AuditLogResult",
    "DispatchResult",
    "DrainResult",
    "OutboxEventResult",
    "WorkflowInstanceCreate",
    "WorkflowInstanceResult",
    "WorkflowTriggerResult",
]
