"""Trigger matcher: turn one domain event into zero or more workflow starts."""

from __future__ import annotations

from typing import TYPE_CHECKING

from caseflow.application.dtos.workflow import WorkflowInstanceResult
from caseflow.domain.entities.outbox import DomainEvent
from caseflow.shared.telemetry.logging import get_logger
from caseflow.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from caseflow.application.interfaces.repositories import IWorkflowTriggerRepository
    from caseflow.application.interfaces.services import IWorkflowService

logger = get_logger(__name__)


class TriggerService:
    """Resolves active triggers for an event and starts one instance per match.

    Implements IDomainEventHandler for the outbox drain. No deduplication:
    two matching triggers start two independent instances.
    """

    def __init__(
        self,
        trigger_repo: IWorkflowTriggerRepository,
        workflow_service: IWorkflowService,
    ) -> None:
        self._trigger_repo = trigger_repo
        self._workflow_service = workflow_service

    @traced("workflow.triggers.handle")
    async def handle_domain_event(self, event: DomainEvent) -> list[WorkflowInstanceResult]:
        """Start the matching workflows for event; return the started instances.

        Matching is exact on tenant (a null tenant matches only global
        triggers), subjectSchema, subjectModel and topic == event_key, over
        active triggers. Missing payload fields match nothing.
        """
        subject = event.subject()
        add_span_attributes(**{"event.topic": event.topic})
        if not subject.is_matchable:
            logger.debug(
                "Event %r has no subjectSchema/subjectModel; no trigger can match",
                event.topic,
            )
            return []

        triggers = await self._trigger_repo.find_active(
            event.tenant_id,
            subject.schema,
            subject.model,
            event.topic,
        )
        started: list[WorkflowInstanceResult] = []
        for trigger in triggers:
            instance = await self._workflow_service.start(
                workflow_id=trigger.workflow_id,
                subject_schema=subject.schema,
                subject_model=subject.model,
                subject_id=subject.id,
                entry_state_key=trigger.entry_state_key,
                tenant_id=event.tenant_id,
            )
            started.append(instance)
        if started:
            logger.info(
                "Event %r started %d workflow instance(s) for %s.%s/%s",
                event.topic,
                len(started),
                subject.schema,
                subject.model,
                subject.id,
            )
        return started
