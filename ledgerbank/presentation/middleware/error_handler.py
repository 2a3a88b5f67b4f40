"""Exception handlers mapping domain errors to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from ledgerbank.domain.exceptions import (
    DomainException,
    InvalidArgumentException,
    LedgerConflictException,
    NotFoundException,
    StorageUnavailableException,
)
from ledgerbank.service.ledger import ledger_settings
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_body(code: str, message: str) -> dict:
    return {
        "error": code,
        "message": message,
        "request_id": get_request_id(),
    }


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Starlette resolves handlers by walking the exception's MRO, so the
    specific subclasses below win over the DomainException fallback.
    """

    @app.exception_handler(NotFoundException)
    async def not_found_handler(
        request: Request,
        exc: NotFoundException,
    ) -> JSONResponse:
        """Handle missing users, accounts and transactions."""
        logger.info("resource_not_found", code=exc.code, message=exc.message)
        return JSONResponse(status_code=404, content=_error_body(exc.code, exc.message))

    @app.exception_handler(InvalidArgumentException)
    async def invalid_argument_handler(
        request: Request,
        exc: InvalidArgumentException,
    ) -> JSONResponse:
        logger.warning(
            "invalid_argument",
            code=exc.code,
            field=exc.field,
            message=exc.message,
        )
        return JSONResponse(status_code=400, content=_error_body(exc.code, exc.message))

    @app.exception_handler(LedgerConflictException)
    async def conflict_handler(
        request: Request,
        exc: LedgerConflictException,
    ) -> JSONResponse:
        """Handle serialization failures; the client may retry the request."""
        logger.warning("ledger_conflict", code=exc.code, message=exc.message)
        return JSONResponse(
            status_code=409,
            content=_error_body(exc.code, exc.message),
            headers={"Retry-After": str(ledger_settings.conflict_retry_after_seconds)},
        )

    @app.exception_handler(StorageUnavailableException)
    async def unavailable_handler(
        request: Request,
        exc: StorageUnavailableException,
    ) -> JSONResponse:
        logger.error("storage_unavailable", code=exc.code, message=exc.message)
        return JSONResponse(
            status_code=503,
            content=_error_body(exc.code, "Storage temporarily unavailable. Please try again."),
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning("domain_exception", code=exc.code, message=exc.message)
        return JSONResponse(status_code=400, content=_error_body(exc.code, exc.message))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "An unexpected error occurred."),
        )
