"""Workflow engine: start instances and advance them along the transition graph."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from caseflow.application.dtos.workflow import (
    WorkflowInstanceCreate,
    WorkflowInstanceResult,
)
from caseflow.domain.entities.workflow import WorkflowEntity
from caseflow.domain.exceptions import ResourceNotFoundException, ValidationException
from caseflow.shared.enums import AuditAction, AuditTargetType
from caseflow.shared.telemetry.logging import get_logger
from caseflow.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from caseflow.application.interfaces.repositories import (
        IWorkflowInstanceRepository,
        IWorkflowRepository,
    )
    from caseflow.application.interfaces.services import IAuditRecorder

logger = get_logger(__name__)


def _require(value: str | None, field: str) -> str:
    if not value or not str(value).strip():
        raise ValidationException(f"{field} is required", field=field)
    return value


class WorkflowService:
    """Creates and advances workflow instances (implements IWorkflowService).

    Every start and every advance call appends exactly one audit entry through
    the recorder. Failures propagate to the caller; nothing is retried here.
    """

    def __init__(
        self,
        workflow_repo: IWorkflowRepository,
        instance_repo: IWorkflowInstanceRepository,
        audit_recorder: IAuditRecorder,
    ) -> None:
        self._workflow_repo = workflow_repo
        self._instance_repo = instance_repo
        self._audit = audit_recorder

    async def _get_workflow(self, workflow_id: str) -> WorkflowEntity:
        workflow = await self._workflow_repo.get_definition(workflow_id)
        if workflow is None:
            raise ResourceNotFoundException("workflow", workflow_id)
        return workflow

    async def get_instance(self, instance_id: str) -> WorkflowInstanceResult:
        """Return instance or raise ResourceNotFoundException."""
        instance = await self._instance_repo.get_by_id(instance_id)
        if instance is None:
            raise ResourceNotFoundException("workflow_instance", instance_id)
        return instance

    async def entry_state_for(self, workflow_id: str) -> str:
        """Entry state of the workflow (definition.entry, default 'open')."""
        workflow = await self._get_workflow(workflow_id)
        return workflow.entry_state_key

    @traced("workflow.start")
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
        """Create an instance at entry_state_key and append WORKFLOW_START.

        Multiple instances for the same subject and workflow are allowed.

        Raises:
            ValidationException: A subject coordinate or the entry state is empty.
            ResourceNotFoundException: The workflow does not exist.
        """
        _require(subject_schema, "subject_schema")
        _require(subject_model, "subject_model")
        _require(subject_id, "subject_id")
        _require(entry_state_key, "entry_state_key")

        workflow = await self._get_workflow(workflow_id)
        if workflow.states and not workflow.has_state(entry_state_key):
            logger.warning(
                "Starting workflow %s at undeclared state %r",
                workflow_id,
                entry_state_key,
            )

        instance = await self._instance_repo.create(
            WorkflowInstanceCreate(
                workflow_id=workflow_id,
                tenant_id=tenant_id,
                subject_schema=subject_schema,
                subject_model=subject_model,
                subject_id=subject_id,
                state_key=entry_state_key,
            )
        )
        await self._audit.record(
            AuditAction.WORKFLOW_START,
            AuditTargetType.WORKFLOW_INSTANCE,
            instance.id,
            actor_id=actor_id,
            tenant_id=tenant_id,
            new_values={"state_key": instance.state_key},
        )
        logger.info(
            "Started workflow instance %s (workflow=%s, subject=%s.%s/%s, state=%s)",
            instance.id,
            workflow_id,
            subject_schema,
            subject_model,
            subject_id,
            instance.state_key,
        )
        return instance

    @traced("workflow.advance")
    async def advance(
        self,
        instance_id: str,
        actor_id: str | None = None,
        event_payload: dict[str, Any] | None = None,
    ) -> WorkflowInstanceResult:
        """Move the instance along the first transition leaving its current state.

        With no outgoing transition the instance is returned unchanged
        (implicit terminal state). event_payload is accepted for callers
        but does not influence transition selection.

        Raises:
            ResourceNotFoundException: Unknown instance (nothing is written),
                or its workflow no longer exists.
        """
        instance = await self._instance_repo.get_by_id(instance_id, for_update=True)
        if instance is None:
            raise ResourceNotFoundException("workflow_instance", instance_id)

        workflow = await self._get_workflow(instance.workflow_id)
        from_state = instance.state_key
        transition = workflow.next_transition(from_state)

        if transition is None:
            logger.debug(
                "Instance %s is in terminal state %r; advance is a no-op",
                instance_id,
                from_state,
            )
            updated = instance
        else:
            updated = await self._instance_repo.update_state(
                instance_id, transition.to_state_key
            )

        add_span_attributes(
            **{"workflow.from_state": from_state, "workflow.to_state": updated.state_key}
        )
        await self._audit.record(
            AuditAction.WORKFLOW_ADVANCE,
            AuditTargetType.WORKFLOW_INSTANCE,
            updated.id,
            actor_id=actor_id,
            tenant_id=updated.tenant_id,
            old_values={"state_key": from_state},
            new_values={"state_key": updated.state_key},
        )
        return updated
