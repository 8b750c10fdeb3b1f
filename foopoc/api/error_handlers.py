"""Error Handlers — global exception handlers for the foopoc API.

Invariants:
    - FooPocError → its http_status with {message, code, category, severity}
    - RequestValidationError → 400 with field-level details
    - Exception (catch-all) → 500, never leaks internal details
    - The full annotation trail is logged, only the outermost tag is returned
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from foopoc.core.errors import ErrorSeverity, FooPocError, format_tag

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_foopoc_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_foopoc_error_handler(app: FastAPI) -> None:

    @app.exception_handler(FooPocError)
    async def foopoc_error_handler(request: Request, exc: FooPocError):
        """Handle all foopoc domain/infrastructure errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"FooPocError: {exc}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "method": request.method,
                "trail": exc.trail,
                "status_code": exc.http_status,
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
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "Q0VL4D", "path": request.url.path},
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
            extra={"error_code": "U0NH8X", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": format_tag("U0NH8X", "An unexpected error occurred."),
                "code": "U0NH8X",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "message": format_tag("Q0VL4D", "Invalid request data."),
        "code": "Q0VL4D",
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
    }
