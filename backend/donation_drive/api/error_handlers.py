"""Error Handlers — global exception handlers for the donation drive API.

Invariants:
    - DonationDriveError → {success: false, message} with the error's HTTP status
    - RequestValidationError → 400 "Invalid request data"
    - Exception (catch-all) → 500, never leaks internal details
    - Internal detail attached under "error" only when VERBOSE_ERRORS is on

Design Decisions:
    - Three-layer handler: domain (DonationDriveError), validation (Pydantic), catch-all (Exception)
    - Verbose flag read per error from cached settings, so it can be flipped in tests
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from donation_drive.config import get_settings
from donation_drive.core.errors import DonationDriveError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _verbose() -> bool:
    return get_settings().verbose_errors


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(DonationDriveError)
    async def domain_error_handler(request: Request, exc: DonationDriveError):
        """Handle all donation drive domain/infrastructure errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "operation": exc.context.operation,
                "backend": exc.context.backend,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(_verbose()),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle malformed bodies (not a JSON object, unparsable JSON)."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details unless verbose."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        content: dict = {"success": False, "message": "Internal server error"}
        if _verbose():
            content["error"] = {
                "code": "INTERNAL_ERROR",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
                "detail": f"{type(exc).__name__}: {exc}",
            }
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content,
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build the envelope for request-shape errors."""
    content: dict = {"success": False, "message": "Invalid request data"}
    if _verbose():
        content["error"] = {
            "code": "VALIDATION_ERROR",
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
        }
    return content
