"""Seed a development database with one workflow, one trigger and one outbox event.

Creates the schema, then the ``service_case`` workflow (open -> in_progress ->
resolved), a ``case.created`` trigger for ``service.Case`` subjects, and one
pending ``case.created`` outbox event. Run the drain afterwards
(scripts.drain_outbox) to see the trigger start an instance.

Usage:
    uv run python -m scripts.seed_dev_data [tenant_id]

Requires: DATABASE_URL (e.g. postgresql+asyncpg://... or sqlite+aiosqlite:///./dev.db).
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from caseflow.shared.utils.generators import generate_cuid

WORKFLOW_KEY = "service_case"
STATES = [("open", "Open"), ("in_progress", "In progress"), ("resolved", "Resolved")]
TRANSITIONS = [("open", "in_progress"), ("in_progress", "resolved")]


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


async def main() -> None:
    _load_env()
    from caseflow.core.config import get_settings
    from caseflow.infrastructure.persistence import database
    from caseflow.infrastructure.persistence.repositories import (
        OutboxRepository,
        WorkflowRepository,
        WorkflowTriggerRepository,
    )
    from caseflow.shared.telemetry.logging import setup_logging

    get_settings.cache_clear()
    setup_logging()
    if not get_settings().database_url:
        print("DATABASE_URL is not set", file=sys.stderr)
        sys.exit(1)

    tenant_id = sys.argv[1] if len(sys.argv) > 1 else None
    await database.create_schema()

    session_factory = database.get_session_factory()
    async with session_factory() as session:
        async with session.begin():
            workflow = await WorkflowRepository(session).create_workflow(
                key=WORKFLOW_KEY,
                name="Service case",
                states=STATES,
                transitions=TRANSITIONS,
                definition={"entry": "open"},
            )
            trigger = await WorkflowTriggerRepository(session).create_trigger(
                workflow_id=workflow.id,
                subject_schema="service",
                subject_model="Case",
                event_key="case.created",
                tenant_id=tenant_id,
            )
            event = await OutboxRepository(session).append(
                "case.created",
                {
                    "subjectSchema": "service",
                    "subjectModel": "Case",
                    "subjectId": generate_cuid(),
                },
                tenant_id=tenant_id,
            )

    print(f"Workflow {WORKFLOW_KEY}: {workflow.id}")
    print(f"Trigger case.created -> {trigger.workflow_id}: {trigger.id}")
    print(f"Outbox event: {event.id}")
    await database.dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
