"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain, store and
framework exceptions to JSON bodies of the form {"error", "message", "details"}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskdesk.core.config import get_settings
from taskdesk.domain.exceptions import StoreUnavailableException, TaskdeskException

logger = logging.getLogger(__name__)

# Domain error_code -> HTTP status. Unlisted codes fall back to 400.
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "INVALID_TRANSITION": 409,
    "DUPLICATE_ACTIVE_TASK": 409,
    "STALE_TASK_STATUS": 409,
    "DUPLICATE_RECORD": 409,
    "STORE_UNAVAILABLE": 503,
}


def status_for_error_code(error_code: str) -> int:
    """Return the HTTP status used for a domain error_code."""
    return _ERROR_CODE_STATUS.get(error_code, 400)


def _taskdesk_exception_handler(
    request: Request, exc: TaskdeskException
) -> JSONResponse:
    """Return JSON from TaskdeskException.to_dict() with the mapped status code."""
    status = status_for_error_code(exc.error_code)
    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return JSONResponse(status_code=status, content=exc.to_dict(), headers=headers)


def _store_exception_handler(request: Request, exc: DBAPIError) -> JSONResponse:
    """Connection loss or driver failure: report the store as unavailable (503)."""
    logger.error("Record store error on %s %s: %s", request.method, request.url.path, exc)
    body = StoreUnavailableException(reason=type(exc).__name__).to_dict()
    return JSONResponse(status_code=503, content=body)


def _integrity_exception_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Constraint violation not translated by a repository (e.g. a vanished foreign key)."""
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=409,
        content={
            "error": "INTEGRITY_ERROR",
            "message": "The change conflicts with existing records",
            "details": {},
        },
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Pydantic errors without the `ctx`/`input` members, which may not be JSON-serializable."""
    return [
        {k: v for k, v in err.items() if k not in ("ctx", "input", "url")}
        for err in exc.errors()
    ]


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    detail: Any = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Handlers: TaskdeskException (and subclasses), IntegrityError,
    OperationalError and DBAPIError, RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(TaskdeskException, _taskdesk_exception_handler)
    app.add_exception_handler(IntegrityError, _integrity_exception_handler)
    app.add_exception_handler(OperationalError, _store_exception_handler)
    app.add_exception_handler(DBAPIError, _store_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
