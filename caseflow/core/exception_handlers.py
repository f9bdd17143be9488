"""HTTP error responses for caseflow.

Every error body has the same shape, {"error", "message", "details"}, whether
it comes from a CaseflowException (workflow or instance not found, blank
subject coordinates, no database configured), a request body that fails
pydantic validation, or an unexpected crash.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from caseflow.core.config import get_settings
from caseflow.domain.exceptions import CaseflowException
from caseflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# CaseflowException.error_code -> HTTP status; unlisted codes are client errors.
ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "VALIDATION_ERROR": 400,
    "SERVICE_UNAVAILABLE": 503,
}
DEFAULT_DOMAIN_STATUS = 400


def _error_body(error: str, message: Any, details: Any = None) -> dict[str, Any]:
    return {"error": error, "message": message, "details": details or {}}


def _caseflow_exception_handler(
    request: Request, exc: CaseflowException
) -> JSONResponse:
    status = ERROR_CODE_STATUS.get(exc.error_code, DEFAULT_DOMAIN_STATUS)
    if status >= 500:
        logger.error("%s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 for malformed bodies and paths (e.g. missing subject_schema)."""
    return JSONResponse(
        status_code=422,
        content=_error_body("VALIDATION_ERROR", "Request validation failed", exc.errors()),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code, content=_error_body("HTTP_ERROR", exc.detail)
    )


def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """500; the exception text is only exposed when DEBUG is on."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(status_code=500, content=_error_body("INTERNAL_ERROR", message))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the caseflow error handlers; called once from create_app()."""
    app.add_exception_handler(CaseflowException, _caseflow_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
