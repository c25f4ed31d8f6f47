"""Error Handlers — global exception handlers for the filter service API.

Invariants:
    - FilterServiceError → structured JSON with error code, message, severity
      (raised outside the dispatcher, e.g. get_provider before startup → 503)
    - Exception (catch-all) → never leaks internal details
    - Filter routes never reach these handlers for provider failures: the
      dispatcher translates those into plain-text responses itself

Design Decisions:
    - Two-layer handler: domain (FilterServiceError), catch-all (Exception).
      Routes declare no typed body or query params, so FastAPI raises no
      RequestValidationError here
    - Extracted from main.py (ADR: ExMA import fan-out < 10)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.errors import FilterServiceError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_filter_service_error_handler(app)
    _register_generic_error_handler(app)


def _register_filter_service_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(FilterServiceError)
    async def filter_service_error_handler(request: Request, exc: FilterServiceError):
        """Handle all filter service domain/infrastructure errors."""
        logger.error(
            f"FilterServiceError: {exc.message}",
            extra={
                "error_code": exc.code, "path": request.url.path,
                "status_code": exc.http_status,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
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
