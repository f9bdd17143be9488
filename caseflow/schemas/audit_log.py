"""Audit log API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class AuditLogResponse(BaseModel):
    """Single audit log entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str | None
    actor_id: str
    action: str
    target_type: str
    target_id: str
    timestamp: datetime
    old_values: dict[str, Any] | None
    new_values: dict[str, Any] | None
