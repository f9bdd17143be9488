"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (logging, telemetry, outbox
poller, DB engine dispose).
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from caseflow.core.config import get_settings
from caseflow.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, telemetry (if enabled), outbox poller (if enabled
    and a database is configured). Shutdown order: poller stop (waits for the
    in-flight drain), telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    if settings.telemetry_enabled:
        from caseflow.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_logging()
        if settings.database_url:
            from caseflow.infrastructure.persistence import database

            database.get_session_factory()
            if database.engine is not None:
                telemetry.instrument_sqlalchemy(database.engine)
        logger.info("Telemetry initialized")

    app.state.outbox_poller = None
    if settings.outbox_poller_enabled and settings.database_url:
        from caseflow.infrastructure.persistence.database import get_session_factory
        from caseflow.infrastructure.services.outbox_poller import OutboxPoller

        poller = OutboxPoller(
            get_session_factory(),
            interval_seconds=settings.outbox_poll_interval_seconds,
            batch_size=settings.outbox_batch_size,
            shutdown_timeout_seconds=settings.outbox_shutdown_timeout_seconds,
        )
        poller.start()
        app.state.outbox_poller = poller
    elif settings.outbox_poller_enabled:
        logger.warning("Outbox poller not started: DATABASE_URL is not set")

    yield

    # ---- Shutdown ----
    poller = getattr(app.state, "outbox_poller", None)
    if poller is not None:
        await poller.stop()
        app.state.outbox_poller = None

    from caseflow.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")

    from caseflow.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
