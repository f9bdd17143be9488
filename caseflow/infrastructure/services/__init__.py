"""Infrastructure services: composition root and background workers."""

from caseflow.infrastructure.services.composition import (
    build_drain_use_case,
    build_trigger_service,
    build_workflow_service,
)
from caseflow.infrastructure.services.outbox_poller import OutboxPoller

__all__ = [
    "OutboxPoller",
    "build_drain_use_case",
    "build_trigger_service",
    "build_workflow_service",
]
