"""AuditRecorder unit tests."""

from unittest.mock import AsyncMock

from caseflow.application.dtos.audit_log import AuditLogEntryCreate
from caseflow.application.services import SYSTEM_ACTOR_ID, AuditRecorder
from caseflow.shared.enums import AuditAction, AuditTargetType


async def test_record_defaults_actor_to_system() -> None:
    repo = AsyncMock()
    recorder = AuditRecorder(repo)

    await recorder.record(
        AuditAction.WORKFLOW_START,
        AuditTargetType.WORKFLOW_INSTANCE,
        "wi1",
        tenant_id="t1",
        new_values={"state_key": "open"},
    )

    repo.append.assert_awaited_once()
    entry: AuditLogEntryCreate = repo.append.call_args.args[0]
    assert entry.actor_id == SYSTEM_ACTOR_ID
    assert entry.action == "WORKFLOW_START"
    assert entry.target_type == "WorkflowInstance"
    assert entry.target_id == "wi1"
    assert entry.tenant_id == "t1"
    assert entry.new_values == {"state_key": "open"}
    assert entry.timestamp.tzinfo is not None


async def test_record_keeps_explicit_actor() -> None:
    repo = AsyncMock()
    await AuditRecorder(repo).record(
        AuditAction.WORKFLOW_ADVANCE,
        AuditTargetType.WORKFLOW_INSTANCE,
        "wi1",
        actor_id="user-7",
    )
    assert repo.append.call_args.args[0].actor_id == "user-7"
