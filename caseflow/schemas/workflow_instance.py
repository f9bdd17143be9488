"""Workflow instance API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StartWorkflowRequest(BaseModel):
    """Request body for starting a workflow against one subject."""

    subject_schema: str = Field(..., min_length=1, max_length=255)
    subject_model: str = Field(..., min_length=1, max_length=255)
    subject_id: str = Field(..., min_length=1, max_length=255)
    entry_state_key: str | None = Field(
        default=None,
        min_length=1,
        max_length=128,
        description="Defaults to the workflow's entry state",
    )
    tenant_id: str | None = None
    actor_id: str | None = None


class AdvanceRequest(BaseModel):
    """Request body for advancing an instance. event_payload is recorded by callers only."""

    actor_id: str | None = None
    event_payload: dict[str, Any] | None = None


class WorkflowInstanceResponse(BaseModel):
    """Workflow instance response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    workflow_id: str
    tenant_id: str | None
    subject_schema: str
    subject_model: str
    subject_id: str
    state_key: str
    created_at: datetime
    updated_at: datetime
