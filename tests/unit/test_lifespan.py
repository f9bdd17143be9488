"""Lifespan wiring: the outbox poller starts with the app and stops on shutdown."""

import pytest
from fastapi import FastAPI

from caseflow.core.config import get_settings
from caseflow.core.lifespan import create_lifespan


@pytest.fixture
def settings_env(monkeypatch):
    def _apply(**env: str) -> None:
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        get_settings.cache_clear()

    yield _apply
    monkeypatch.undo()
    get_settings.cache_clear()


async def test_poller_not_started_without_database(settings_env) -> None:
    settings_env(OUTBOX_POLLER_ENABLED="true", DATABASE_URL="")
    app = FastAPI()

    async with create_lifespan(app):
        assert app.state.outbox_poller is None


async def test_poller_started_and_stopped_with_app(settings_env) -> None:
    settings_env(
        OUTBOX_POLLER_ENABLED="true",
        DATABASE_URL="sqlite+aiosqlite://",
        OUTBOX_POLL_INTERVAL_SECONDS="0.01",
    )
    app = FastAPI()

    async with create_lifespan(app):
        poller = app.state.outbox_poller
        assert poller is not None
        assert poller.running

    assert app.state.outbox_poller is None
    assert not poller.running
