"""Error Handlers: global exception handlers for the relay API.

Invariants:
    - RelayError → structured JSON with error code, message, severity
    - UpstreamError → generic message; the cause is logged with its traceback, never returned
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (RelayError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py (ADR: import fan-out < 10)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from chat_relay.core.errors import (
    GENERIC_SERVER_ERROR, ErrorSeverity, RelayError, UpstreamError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_relay_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_relay_error_handler(app: FastAPI) -> None:
    """Register relay domain/infrastructure error handler."""

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError):
        """Handle all relay domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "user_id": exc.context.user_id,
            "operation": exc.context.operation,
        }
        if isinstance(exc, UpstreamError):
            logger.error(
                f"UpstreamError: {exc.message}",
                extra=extra, exc_info=exc,
            )
        else:
            logger.warning(f"RelayError: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": GENERIC_SERVER_ERROR,
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.WARNING.value,
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
