"""Workflow instance API: thin routes delegating to WorkflowService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from caseflow.api.v1.dependencies import (
    get_audit_log_repo,
    get_workflow_service,
    get_workflow_service_for_write,
)
from caseflow.application.use_cases.workflows import WorkflowService
from caseflow.infrastructure.persistence.repositories import AuditLogRepository
from caseflow.schemas.audit_log import AuditLogResponse
from caseflow.schemas.workflow_instance import (
    AdvanceRequest,
    StartWorkflowRequest,
    WorkflowInstanceResponse,
)
from caseflow.shared.enums import AuditTargetType

router = APIRouter()


@router.post(
    "/workflows/{workflow_id}/instances",
    response_model=WorkflowInstanceResponse,
    status_code=201,
)
async def start_workflow(
    workflow_id: str,
    body: StartWorkflowRequest,
    service: Annotated[WorkflowService, Depends(get_workflow_service_for_write)],
):
    """Start an instance of the workflow; entry state defaults to the workflow's entry."""
    entry_state_key = body.entry_state_key or await service.entry_state_for(workflow_id)
    instance = await service.start(
        workflow_id=workflow_id,
        subject_schema=body.subject_schema,
        subject_model=body.subject_model,
        subject_id=body.subject_id,
        entry_state_key=entry_state_key,
        tenant_id=body.tenant_id,
        actor_id=body.actor_id,
    )
    return WorkflowInstanceResponse.model_validate(instance)


@router.get("/workflow-instances/{instance_id}", response_model=WorkflowInstanceResponse)
async def get_workflow_instance(
    instance_id: str,
    service: Annotated[WorkflowService, Depends(get_workflow_service)],
):
    instance = await service.get_instance(instance_id)
    return WorkflowInstanceResponse.model_validate(instance)


@router.post(
    "/workflow-instances/{instance_id}/advance",
    response_model=WorkflowInstanceResponse,
)
async def advance_workflow_instance(
    instance_id: str,
    service: Annotated[WorkflowService, Depends(get_workflow_service_for_write)],
    body: AdvanceRequest | None = None,
):
    """Follow the first transition out of the current state (no-op when terminal)."""
    body = body or AdvanceRequest()
    instance = await service.advance(
        instance_id, actor_id=body.actor_id, event_payload=body.event_payload
    )
    return WorkflowInstanceResponse.model_validate(instance)


@router.get(
    "/workflow-instances/{instance_id}/audit-log",
    response_model=list[AuditLogResponse],
)
async def get_workflow_instance_audit_log(
    instance_id: str,
    service: Annotated[WorkflowService, Depends(get_workflow_service)],
    audit_repo: Annotated[AuditLogRepository, Depends(get_audit_log_repo)],
    limit: int = Query(50, ge=1, le=500),
):
    """Audit trail of the instance, newest first. 404 if the instance does not exist."""
    await service.get_instance(instance_id)
    entries = await audit_repo.list_for_target(
        AuditTargetType.WORKFLOW_INSTANCE.value, instance_id, limit=limit
    )
    return [AuditLogResponse.model_validate(e) for e in entries]
