"""Error Handlers — map AttuneError, validation failures, and crashes to one JSON envelope.

Invariants:
    - AttuneError → exc.http_status with exc.to_response(); log level follows exc.severity
    - RequestValidationError → 400 VALIDATION_ERROR, one detail per failing field
    - Validation detail fields use the wire (camelCase) path without the
      body/query/path prefix, which is reported separately as `location`
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks internal details

Design Decisions:
    - Device-level errors never reach these handlers: the executor records them inline
    - Error context ids (user/device/policy) copied into log extras for the JSON formatter
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from attune.core.errors import AttuneError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}

_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(AttuneError, attune_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


async def attune_error_handler(request: Request, exc: AttuneError) -> JSONResponse:
    logger.log(
        _LOG_LEVELS[exc.severity],
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "user_id": exc.context.user_id,
            "device_id": exc.context.device_id,
            "policy_id": exc.context.policy_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def validation_error_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = validation_details(exc.errors())
    logger.warning(
        f"Validation error on {request.url.path}: "
        f"{', '.join(d['field'] or d['location'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.WARNING.value,
                "details": details,
            },
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def validation_details(errors: list[dict]) -> list[dict]:
    """Pydantic error list → [{location, field, message, type}]. Pure."""
    details = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        location = loc[0] if loc and loc[0] in _LOCATIONS else "body"
        path = loc[1:] if loc and loc[0] in _LOCATIONS else loc
        details.append({
            "location": location,
            "field": ".".join(path),
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        })
    return details
