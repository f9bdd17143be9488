"""Service interfaces (ports) for the application layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from caseflow.application.dtos.audit_log import AuditLogResult
    from caseflow.application.dtos.workflow import WorkflowInstanceResult
    from caseflow.domain.entities.outbox import DomainEvent
    from caseflow.shared.enums import AuditAction, AuditTargetType


class IAuditRecorder(Protocol):
    """Appends audit rows for workflow actions."""

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
        """Append one audit entry; actor defaults to the system actor."""


class IWorkflowService(Protocol):
    """Workflow engine operations exposed to triggers and the API."""

    async def start(
        self,
        workflow_id: str,
        subject_schema: str,
        subject_model: str,
        subject_id: str,
        entry_state_key: str,
        tenant_id: str | None = None,
        actor_id: str | None = None,
    ) -> WorkflowInstanceResult:
        """Create an instance at entry_state_key and audit the start."""

    async def advance(
        self,
        instance_id: str,
        actor_id: str | None = None,
        event_payload: dict[str, Any] | None = None,
    ) -> WorkflowInstanceResult:
        """Move the instance along its first outgoing transition and audit the call."""


class IDomainEventHandler(Protocol):
    """Consumes one domain event (dispatch target of the outbox drain)."""

    async def handle_domain_event(self, event: DomainEvent) -> Any:
        """Handle the event; raise to signal a failed dispatch."""
