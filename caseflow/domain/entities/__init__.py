"""Domain entities (no ORM dependency)."""

from caseflow.domain.entities.outbox import DomainEvent, SubjectRef
from caseflow.domain.entities.workflow import (
    DEFAULT_ENTRY_STATE,
    WorkflowEntity,
    WorkflowStateEntity,
    WorkflowTransitionEntity,
    resolve_entry_state,
)

__all__ = [
    "DEFAULT_ENTRY_STATE",
    "DomainEvent",
    "SubjectRef",
    "WorkflowEntity",
    "WorkflowStateEntity",
    "WorkflowTransitionEntity",
    "resolve_entry_state",
]
