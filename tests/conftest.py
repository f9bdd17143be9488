"""Pytest configuration and fixtures for caseflow.

Database fixtures run on in-memory SQLite (aiosqlite, one shared connection)
so repository, drain and API tests need no external server. Each test gets a
fresh schema.
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# The app must not start a background poller or reach for a real database in tests.
os.environ["OUTBOX_POLLER_ENABLED"] = "false"
os.environ["DATABASE_URL"] = ""

from caseflow.core.config import get_settings  # noqa: E402
from caseflow.infrastructure.persistence.database import (  # noqa: E402
    create_schema,
    get_db,
    get_db_transactional,
)

get_settings.cache_clear()


@pytest.fixture
async def engine() -> AsyncEngine:
    """In-memory SQLite engine with the schema created."""
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # pysqlite's own transaction handling breaks SAVEPOINT; emit BEGIN ourselves.
    @event.listens_for(eng.sync_engine, "connect")
    def _do_connect(dbapi_connection, _connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(eng.sync_engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    await create_schema(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncSession:
    """Database session for repository tests. Rolls back after test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(session_factory) -> AsyncClient:
    """Async HTTP client against a fresh app wired to the SQLite session factory."""
    from caseflow.main import create_app

    app = create_app()

    async def _get_db():
        async with session_factory() as session:
            yield session

    async def _get_db_transactional():
        async with session_factory() as session:
            async with session.begin():
                yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_db_transactional] = _get_db_transactional
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
