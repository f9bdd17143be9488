"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from caseflow.application.dtos.audit_log import AuditLogEntryCreate, AuditLogResult
    from caseflow.application.dtos.outbox import OutboxEventResult
    from caseflow.application.dtos.workflow import (
        WorkflowInstanceCreate,
        WorkflowInstanceResult,
        WorkflowTriggerResult,
    )
    from caseflow.domain.entities.workflow import WorkflowEntity


class IOutboxRepository(Protocol):
    """Protocol for the outbox store (DIP)."""

    async def append(
        self,
        topic: str,
        payload: dict[str, Any] | None,
        tenant_id: str | None = None,
    ) -> OutboxEventResult:
        """Append one unprocessed event."""

    async def get_by_id(self, event_id: str) -> OutboxEventResult | None:
        """Return outbox event by ID."""

    async def list_unprocessed(
        self, limit: int, now: datetime | None = None
    ) -> list[OutboxEventResult]:
        """Return up to limit unprocessed, non-dead-lettered, due events, oldest first."""

    async def mark_processed(self, event_id: str) -> None:
        """Set processed_at to now and increment attempts."""

    async def mark_failed(
        self,
        event_id: str,
        error: str,
        *,
        next_attempt_at: datetime | None = None,
        dead_letter: bool = False,
    ) -> None:
        """Increment attempts and record error; processed_at stays null."""


class IWorkflowTriggerRepository(Protocol):
    """Protocol for workflow trigger lookup (DIP)."""

    async def find_active(
        self,
        tenant_id: str | None,
        subject_schema: str | None,
        subject_model: str | None,
        event_key: str,
    ) -> list[WorkflowTriggerResult]:
        """Return active triggers matching tenant (null matches null), subject and event key."""


class IWorkflowRepository(Protocol):
    """Protocol for workflow definitions (DIP)."""

    async def get_definition(self, workflow_id: str) -> WorkflowEntity | None:
        """Return workflow with states and transitions in stored order."""


class IWorkflowInstanceRepository(Protocol):
    """Protocol for workflow instances (DIP)."""

    async def create(self, data: WorkflowInstanceCreate) -> WorkflowInstanceResult:
        """Create a new instance."""

    async def get_by_id(
        self, instance_id: str, *, for_update: bool = False
    ) -> WorkflowInstanceResult | None:
        """Return instance by ID; for_update locks the row until the transaction ends."""

    async def update_state(
        self, instance_id: str, state_key: str
    ) -> WorkflowInstanceResult:
        """Set state_key and updated_at; return the updated instance."""


class IAuditLogRepository(Protocol):
    """Protocol for the append-only audit log (DIP)."""

    async def append(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        """Append one audit entry."""

    async def list_for_target(
        self, target_type: str, target_id: str, limit: int = 50
    ) -> list[AuditLogResult]:
        """Return audit entries for a target, newest first."""
