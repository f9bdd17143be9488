"""Workflow instance API tests against SQLite."""

import pytest
from httpx import AsyncClient

from caseflow.infrastructure.persistence.repositories import WorkflowRepository

pytestmark = pytest.mark.requires_db

START_BODY = {"subject_schema": "service", "subject_model": "Case", "subject_id": "c1"}


@pytest.fixture
async def workflow_id(session_factory) -> str:
    async with session_factory() as session:
        async with session.begin():
            workflow = await WorkflowRepository(session).create_workflow(
                key="service_case",
                name="Service case",
                states=["open", "in_progress", "resolved"],
                transitions=[("open", "in_progress"), ("in_progress", "resolved")],
                definition={"entry": "open"},
            )
    return workflow.id


async def test_start_defaults_to_entry_state(client: AsyncClient, workflow_id: str) -> None:
    response = await client.post(f"/api/v1/workflows/{workflow_id}/instances", json=START_BODY)
    assert response.status_code == 201
    data = response.json()
    assert data["workflow_id"] == workflow_id
    assert data["state_key"] == "open"
    assert data["tenant_id"] is None


async def test_start_with_explicit_entry_state(client: AsyncClient, workflow_id: str) -> None:
    response = await client.post(
        f"/api/v1/workflows/{workflow_id}/instances",
        json={**START_BODY, "entry_state_key": "in_progress", "tenant_id": "t1"},
    )
    assert response.status_code == 201
    assert response.json()["state_key"] == "in_progress"
    assert response.json()["tenant_id"] == "t1"


async def test_start_unknown_workflow_returns_404(client: AsyncClient) -> None:
    response = await client.post("/api/v1/workflows/missing/instances", json=START_BODY)
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_start_blank_subject_returns_400(client: AsyncClient, workflow_id: str) -> None:
    response = await client.post(
        f"/api/v1/workflows/{workflow_id}/instances",
        json={**START_BODY, "subject_id": "   "},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_advance_get_and_audit_log(client: AsyncClient, workflow_id: str) -> None:
    created = (
        await client.post(f"/api/v1/workflows/{workflow_id}/instances", json=START_BODY)
    ).json()
    instance_id = created["id"]

    first = await client.post(
        f"/api/v1/workflow-instances/{instance_id}/advance", json={"actor_id": "user-1"}
    )
    second = await client.post(f"/api/v1/workflow-instances/{instance_id}/advance")
    third = await client.post(f"/api/v1/workflow-instances/{instance_id}/advance")

    assert [r.json()["state_key"] for r in (first, second, third)] == [
        "in_progress",
        "resolved",
        "resolved",
    ]
    fetched = await client.get(f"/api/v1/workflow-instances/{instance_id}")
    assert fetched.status_code == 200
    assert fetched.json()["state_key"] == "resolved"

    audit = await client.get(f"/api/v1/workflow-instances/{instance_id}/audit-log")
    assert audit.status_code == 200
    entries = audit.json()
    assert len(entries) == 4
    assert {e["action"] for e in entries} == {"WORKFLOW_START", "WORKFLOW_ADVANCE"}
    assert all(e["target_type"] == "WorkflowInstance" for e in entries)
    assert any(e["actor_id"] == "user-1" for e in entries)


async def test_unknown_instance_returns_404(client: AsyncClient) -> None:
    assert (await client.get("/api/v1/workflow-instances/missing")).status_code == 404
    assert (await client.post("/api/v1/workflow-instances/missing/advance")).status_code == 404
    assert (await client.get("/api/v1/workflow-instances/missing/audit-log")).status_code == 404
