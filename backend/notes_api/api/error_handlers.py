"""Error Handlers — global exception handlers for the Notes API.

Invariants:
    - NotesApiError → structured JSON with error code, message, severity
    - RateLimitedError responses carry a Retry-After header
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → never leaks internal details
"""

import logging
import math

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from notes_api.core.errors import NotesApiError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_notes_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_notes_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(NotesApiError)
    async def notes_error_handler(request: Request, exc: NotesApiError):
        """Handle all Notes API domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"NotesApiError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "client_id": exc.context.client_id,
                "user_id": exc.context.user_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(),
            headers=_build_headers(exc),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {type(exc).__name__}",
            exc_info=True,
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


def _build_headers(exc: NotesApiError) -> dict[str, str] | None:
    retry_after_ms = exc.context.retry_after_ms
    if exc.http_status != status.HTTP_429_TOO_MANY_REQUESTS or retry_after_ms is None:
        return None
    return {"Retry-After": str(max(1, math.ceil(retry_after_ms / 1000)))}


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response. Input values are not echoed."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
