"""DTOs for workflow triggers and workflow instances."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from caseflow.domain.entities.workflow import resolve_entry_state


@dataclass(frozen=True)
class WorkflowTriggerResult:
    """Active trigger together with its workflow's definition document."""

    id: str
    tenant_id: str | None
    subject_schema: str
    subject_model: str
    event_key: str
    active: bool
    workflow_id: str
    workflow_definition: dict[str, Any] | None = None

    @property
    def entry_state_key(self) -> str:
        return resolve_entry_state(self.workflow_definition)


@dataclass(frozen=True)
class WorkflowInstanceCreate:
    """Input for creating one workflow instance."""

    workflow_id: str
    tenant_id: str | None
    subject_schema: str
    subject_model: str
    subject_id: str
    state_key: str


@dataclass(frozen=True)
class WorkflowInstanceResult:
    """Workflow instance (read-model)."""

    id: str
    workflow_id: str
    tenant_id: str | None
    subject_schema: str
    subject_model: str
    subject_id: str
    state_key: str
    created_at: datetime
    updated_at: datetime
