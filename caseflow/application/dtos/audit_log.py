"""DTOs for the workflow audit trail."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AuditLogEntryCreate:
    """Input for appending one audit log record. Append-only; no update."""

    actor_id: str
    action: str
    target_type: str
    target_id: str
    timestamp: datetime
    tenant_id: str | None = None
    old_values: dict[str, Any] | None = None
    new_values: dict[str, Any] | None = None


@dataclass(frozen=True)
class AuditLogResult:
    """Single audit log entry (read-model for list/get)."""

    id: str
    tenant_id: str | None
    actor_id: str
    action: str
    target_type: str
    target_id: str
    timestamp: datetime
    old_values: dict[str, Any] | None
    new_values: dict[str, Any] | None
