"""Error Handlers — global exception handlers for the invoice API.

Invariants:
    - InvoiceApiError → its own status code and to_response() body
    - RequestValidationError → 422 {"message", "errors"}, keyed by field name,
      each Pydantic error translated by core/validation_messages.message_for
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (InvoiceApiError), validation (FastAPI), catch-all (Exception)
    - Extracted from main.py to keep the entry point thin
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from invoice_api.core.errors import InvoiceApiError, ErrorSeverity
from invoice_api.core.validation_messages import (
    VALIDATION_FAILED_MESSAGE, message_for,
)

logger = logging.getLogger(__name__)

# Location prefixes FastAPI puts in front of the field name
_LOC_SOURCES = {"body", "query", "path", "header", "cookie"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register invoice domain/infrastructure error handler."""

    @app.exception_handler(InvoiceApiError)
    async def invoice_api_error_handler(request: Request, exc: InvoiceApiError):
        """Handle all invoice API domain/infrastructure errors."""
        level = (
            logging.ERROR
            if exc.severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL)
            else logging.WARNING
        )
        logger.log(
            level,
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "status_code": exc.http_status,
                "invoice_id": exc.context.invoice_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register request-shape validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle FastAPI request validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
        )
        return JSONResponse(
            status_code=422,
            content=build_validation_error_response(exc.errors()),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "error_code": "INTERNAL_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Server Error"},
        )


def _field_name(loc: tuple | list) -> str:
    parts = [str(p) for p in loc if str(p) not in _LOC_SOURCES]
    if not parts:
        return str(loc[0]) if loc else "request"
    return ".".join(parts)


def build_validation_error_response(errors: list[dict]) -> dict:
    """Group FastAPI/Pydantic error entries into {field: [messages]}.

    Known error types get the API's own wording; anything else keeps
    Pydantic's message.
    """
    grouped: dict[str, list[str]] = {}
    for e in errors:
        field_name = _field_name(e.get("loc", ()))
        message = message_for(field_name, e.get("type", ""), e.get("ctx")) or e["msg"]
        grouped.setdefault(field_name, []).append(message)
    return {"message": VALIDATION_FAILED_MESSAGE, "errors": grouped}
