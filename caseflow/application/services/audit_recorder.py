"""Audit recorder: appends one audit_log row per workflow start/advance."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from caseflow.application.dtos.audit_log import AuditLogEntryCreate, AuditLogResult
from caseflow.shared.enums import AuditAction, AuditTargetType
from caseflow.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from caseflow.application.interfaces.repositories import IAuditLogRepository

SYSTEM_ACTOR_ID = "system"


class AuditRecorder:
    """Writes audit entries through the audit log repository (implements IAuditRecorder).

    Shares the caller's session, so the entry commits or rolls back together
    with the state change it describes.
    """

    def __init__(self, audit_repo: IAuditLogRepository) -> None:
        self._audit_repo = audit_repo

    async def record(
        self,
        action: AuditAction,
        target_type: AuditTargetType,
        target_id: str,
        *,
        actor_id: str | None = None,
        tenant_id: str | None = None,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
    ) -> AuditLogResult:
        """Append one entry; actor_id defaults to SYSTEM_ACTOR_ID."""
        entry = AuditLogEntryCreate(
            actor_id=actor_id or SYSTEM_ACTOR_ID,
            action=action.value,
            target_type=target_type.value,
            target_id=target_id,
            timestamp=utc_now(),
            tenant_id=tenant_id,
            old_values=old_values,
            new_values=new_values,
        )
        return await self._audit_repo.append(entry)
