"""Smoke tests for health endpoints and app wiring."""

from httpx import ASGITransport, AsyncClient

from caseflow.infrastructure.persistence import database


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200, status ok and the poller state."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["outbox_poller"] == "disabled"


async def test_readiness_without_database_returns_503(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"


async def test_instance_lookup_without_database_returns_503(monkeypatch) -> None:
    """No DATABASE_URL: the session dependency raises and the error body says so."""
    from caseflow.main import create_app

    monkeypatch.setattr(database, "engine", None)
    monkeypatch.setattr(database, "AsyncSessionLocal", None)
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/api/v1/workflow-instances/missing")
    assert response.status_code == 503
    body = response.json()
    assert body["error"] == "SERVICE_UNAVAILABLE"
    assert set(body) == {"error", "message", "details"}
