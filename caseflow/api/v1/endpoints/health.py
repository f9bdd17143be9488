"""Health check endpoints: liveness (with poller status) and database readiness."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from caseflow.core.config import get_settings
from caseflow.domain.exceptions import SqlNotConfiguredException
from caseflow.infrastructure.persistence.database import get_session_factory
from caseflow.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok plus whether the outbox poller is running."""
    poller = getattr(request.app.state, "outbox_poller", None)
    if poller is None:
        status = "disabled"
    else:
        status = "running" if poller.running else "stopped"
    return HealthResponse(outbox_poller=status)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database not reachable", "model": ReadinessErrorResponse}},
)
async def readiness_check() -> ReadinessResponse | JSONResponse:
    """Return 200 when SELECT 1 succeeds; 503 otherwise."""
    if not get_settings().database_url:
        message = SqlNotConfiguredException().message
    else:
        try:
            async with get_session_factory()() as session:
                await session.execute(text("SELECT 1"))
            return ReadinessResponse()
        except Exception as exc:
            message = f"Database check failed: {type(exc).__name__}"
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(message=message).model_dump(),
    )
