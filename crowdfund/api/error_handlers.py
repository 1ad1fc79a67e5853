"""Error Handlers — global exception handlers for the crowdfund API.

Invariants:
    - CrowdfundError → structured JSON with error code, message, severity
    - RequestValidationError → INVALID_PAYLOAD with field-level details
    - Exception (catch-all) → FAIL, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (CrowdfundError), validation (Pydantic), catch-all (Exception)
    - Body type/range errors share the INVALID_PAYLOAD code with lifecycle presence checks
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from crowdfund.core.errors import CrowdfundError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_crowdfund_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_crowdfund_error_handler(app: FastAPI) -> None:

    @app.exception_handler(CrowdfundError)
    async def crowdfund_error_handler(request: Request, exc: CrowdfundError):
        """Handle all crowdfund domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"CrowdfundError: {exc.message}",
            extra={
                "error_code": exc.code, "path": request.url.path,
                "project_id": exc.context.project_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "INVALID_PAYLOAD", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "FAIL", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "FAIL",
                    "message": "An unexpected error occurred",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "INVALID_PAYLOAD",
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
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
