"""Application services."""

from caseflow.application.services.audit_recorder import SYSTEM_ACTOR_ID, AuditRecorder

__all__ = ["SYSTEM_ACTOR_ID", "AuditRecorder"]
