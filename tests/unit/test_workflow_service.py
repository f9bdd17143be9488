"""WorkflowService unit tests with in-memory repositories."""

import pytest

from caseflow.application.services import AuditRecorder
from caseflow.application.use_cases.workflows import WorkflowService
from caseflow.domain.exceptions import ResourceNotFoundException, ValidationException
from tests.fakes import (
    FakeAuditLogRepository,
    FakeWorkflowInstanceRepository,
    FakeWorkflowRepository,
    make_workflow,
)


@pytest.fixture
def repos():
    workflow_repo = FakeWorkflowRepository(
        make_workflow("wf1"),
        make_workflow("wf_fork", states=["open", "a", "b"], transitions=[("open", "a"), ("open", "b")]),
    )
    return workflow_repo, FakeWorkflowInstanceRepository(), FakeAuditLogRepository()


@pytest.fixture
def service(repos) -> WorkflowService:
    workflow_repo, instance_repo, audit_repo = repos
    return WorkflowService(workflow_repo, instance_repo, AuditRecorder(audit_repo))


async def _start(service: WorkflowService, workflow_id: str = "wf1", state: str = "open"):
    return await service.start(
        workflow_id=workflow_id,
        subject_schema="service",
        subject_model="Case",
        subject_id="c1",
        entry_state_key=state,
        tenant_id="t1",
    )


async def test_start_creates_instance_and_audits(service, repos) -> None:
    _, instance_repo, audit_repo = repos

    instance = await _start(service)

    assert instance.state_key == "open"
    assert instance.tenant_id == "t1"
    assert instance_repo.instances[instance.id] == instance
    assert len(audit_repo.entries) == 1
    entry = audit_repo.entries[0]
    assert entry.action == "WORKFLOW_START"
    assert entry.target_type == "WorkflowInstance"
    assert entry.target_id == instance.id
    assert entry.actor_id == "system"
    assert entry.new_values == {"state_key": "open"}


async def test_start_allows_undeclared_entry_state(service) -> None:
    instance = await _start(service, state="triage")
    assert instance.state_key == "triage"


async def test_start_unknown_workflow_raises(service, repos) -> None:
    _, instance_repo, audit_repo = repos
    with pytest.raises(ResourceNotFoundException):
        await _start(service, workflow_id="missing")
    assert instance_repo.instances == {}
    assert audit_repo.entries == []


async def test_start_requires_subject_coordinates(service) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await service.start(
            workflow_id="wf1",
            subject_schema="service",
            subject_model="Case",
            subject_id="",
            entry_state_key="open",
        )
    assert exc_info.value.details == {"field": "subject_id"}


async def test_advance_follows_first_transition(service, repos) -> None:
    """open -> in_progress, with one WORKFLOW_ADVANCE audit row."""
    _, instance_repo, audit_repo = repos
    instance = await _start(service)

    advanced = await service.advance(instance.id, actor_id="user-1")

    assert advanced.state_key == "in_progress"
    assert instance_repo.locked == [instance.id]
    entry = audit_repo.entries[-1]
    assert entry.action == "WORKFLOW_ADVANCE"
    assert entry.actor_id == "user-1"
    assert entry.old_values == {"state_key": "open"}
    assert entry.new_values == {"state_key": "in_progress"}


async def test_advance_from_terminal_state_is_noop_but_audited(service, repos) -> None:
    _, _, audit_repo = repos
    instance = await _start(service)
    await service.advance(instance.id)
    resolved = await service.advance(instance.id)
    assert resolved.state_key == "resolved"
    audit_count = len(audit_repo.entries)

    again = await service.advance(instance.id)

    assert again.state_key == "resolved"
    assert again.updated_at == resolved.updated_at
    assert len(audit_repo.entries) == audit_count + 1
    assert audit_repo.entries[-1].old_values == audit_repo.entries[-1].new_values


async def test_advance_is_deterministic_with_competing_transitions(service) -> None:
    results = []
    for _ in range(3):
        instance = await _start(service, workflow_id="wf_fork")
        results.append((await service.advance(instance.id)).state_key)
    assert results == ["a", "a", "a"]


async def test_advance_unknown_instance_raises_without_audit(service, repos) -> None:
    _, _, audit_repo = repos
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await service.advance("missing")
    assert exc_info.value.details["resource_type"] == "workflow_instance"
    assert audit_repo.entries == []


async def test_advance_ignores_event_payload(service) -> None:
    instance = await _start(service)
    advanced = await service.advance(instance.id, event_payload={"goto": "resolved"})
    assert advanced.state_key == "in_progress"


async def test_entry_state_for(service, repos) -> None:
    workflow_repo, _, _ = repos
    workflow_repo.workflows["wf_entry"] = make_workflow("wf_entry", definition={"entry": "triage"})
    assert await service.entry_state_for("wf1") == "open"
    assert await service.entry_state_for("wf_entry") == "triage"
    with pytest.raises(ResourceNotFoundException):
        await service.entry_state_for("missing")
