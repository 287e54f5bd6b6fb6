"""Error Handlers: map FoodLoop failures onto the HTTP error envelope.

Invariants:
    - Caller errors (404 / 409 / 400) log at WARNING with the entity ids from ErrorContext
    - StorageError -> 503 with Retry-After; the rolled-back unit of work is safe to retry
    - Malformed bodies -> 400 VALIDATION_ERROR, same envelope as domain validation
    - Anything else -> 500 INTERNAL_ERROR without internal details

Design Decisions:
    - Starlette resolves handlers by exception MRO, so the StorageError handler
      wins over the FoodLoopError one without ordering tricks
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from foodloop.core.errors import FoodLoopError, StorageError, ErrorSeverity

logger = logging.getLogger(__name__)

STORAGE_RETRY_AFTER_SECONDS = 5


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FoodLoopError, _domain_error)
    app.add_exception_handler(StorageError, _storage_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(Exception, _unhandled_error)


def _log_extra(request: Request, exc: FoodLoopError) -> dict:
    ctx = exc.context
    return {
        "error_code": exc.code,
        "path": request.url.path,
        "user_id": ctx.user_id,
        "donation_id": ctx.donation_id,
        "request_id": ctx.request_id,
    }


async def _domain_error(request: Request, exc: FoodLoopError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(exc.message, extra=_log_extra(request, exc))
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _storage_error(request: Request, exc: StorageError) -> JSONResponse:
    logger.error(
        f"Storage failure during {exc.operation}: {exc.message}",
        extra=_log_extra(request, exc),
    )
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_response(),
        headers={"Retry-After": str(STORAGE_RETRY_AFTER_SECONDS)},
    )


async def _request_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            # Drop the "body" / "path" prefix: clients know where they sent it
            "field": ".".join(str(loc) for loc in e["loc"][1:]) or str(e["loc"][0]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Rejected payload on {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": "validation",
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )
