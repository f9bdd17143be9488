"""Persistence models: ORM entities and mixins."""

from caseflow.infrastructure.persistence.models.audit_log import AuditLog
from caseflow.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    OptionalTenantMixin,
    TimestampMixin,
)
from caseflow.infrastructure.persistence.models.outbox_event import OutboxEvent
from caseflow.infrastructure.persistence.models.workflow import (
    Workflow,
    WorkflowInstance,
    WorkflowState,
    WorkflowTransition,
    WorkflowTrigger,
)

__all__ = [
    "AuditLog",
    "OutboxEvent",
    "Workflow",
    "WorkflowInstance",
    "WorkflowState",
    "WorkflowTransition",
    "WorkflowTrigger",
    "CuidMixin",
    "OptionalTenantMixin",
    "CreatedAtMixin",
    "TimestampMixin",
]
