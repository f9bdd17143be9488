"""Shared enumerations for caseflow.

Cross-cutting enums used by application and infrastructure (audit actions,
outbox dispatch outcomes).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class AuditAction(_ValuesMixin, str, Enum):
    """Audit action tags written by the workflow engine."""

    WORKFLOW_START = "WORKFLOW_START"
    WORKFLOW_ADVANCE = "WORKFLOW_ADVANCE"


class AuditTargetType(_ValuesMixin, str, Enum):
    """Entity types an audit row can point at."""

    WORKFLOW_INSTANCE = "WorkflowInstance"


class DispatchOutcome(_ValuesMixin, str, Enum):
    """Result of one outbox dispatch attempt."""

    PROCESSED = "processed"
    RETRY = "retry"
    DEAD_LETTERED = "dead_lettered"
