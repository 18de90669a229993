"""Error handlers — the single place where exceptions become HTTP responses.

Invariants:
    - Every error response uses the envelope {success: false, error, message, details?}
    - Store failures and unexpected exceptions never leak internal details
    - Handlers run for every route, so endpoints contain no status-code logic

Design Decisions:
    - Registered per exception type on the FastAPI app; Exception is the catch-all
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.application.schemas import ErrorResponse
from app.domain.exceptions import (
    EntityNotFoundError,
    InconsistentStateError,
    MalformedRequestError,
    StorageError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

_INTERNAL_ERROR = ErrorResponse(
    error="Internal server error",
    message="An unexpected error occurred",
)


def _respond(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.to_content())


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ValidationFailedError)
    async def validation_failed_handler(request: Request, exc: ValidationFailedError):
        logger.warning("Validation failed on %s %s: %s", request.method, request.url.path, exc.errors)
        return _respond(
            status.HTTP_400_BAD_REQUEST,
            ErrorResponse(
                error="Validation failed",
                message="Invalid request data",
                details=exc.errors,
            ),
        )

    @app.exception_handler(MalformedRequestError)
    async def malformed_request_handler(request: Request, exc: MalformedRequestError):
        logger.warning("Malformed request on %s %s: %s", request.method, request.url.path, exc)
        return _respond(
            status.HTTP_400_BAD_REQUEST,
            ErrorResponse(error="Invalid JSON", message=exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning("Unparseable request on %s %s: %s", request.method, request.url.path, exc.errors())
        return _respond(
            status.HTTP_400_BAD_REQUEST,
            ErrorResponse(error="Invalid JSON", message="Request body contains invalid JSON"),
        )

    @app.exception_handler(EntityNotFoundError)
    async def not_found_handler(request: Request, exc: EntityNotFoundError):
        logger.info("Not found on %s %s: %s", request.method, request.url.path, exc)
        return _respond(
            status.HTTP_404_NOT_FOUND,
            ErrorResponse(error="Not found", message=str(exc)),
        )

    @app.exception_handler(InconsistentStateError)
    async def inconsistent_state_handler(request: Request, exc: InconsistentStateError):
        logger.error("Inconsistent state on %s %s: %s", request.method, request.url.path, exc)
        return _respond(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(error=exc.error, message=exc.message),
        )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(
            "Storage failure during %s on %s %s: %s",
            exc.operation, request.method, request.url.path, exc,
        )
        return _respond(status.HTTP_500_INTERNAL_SERVER_ERROR, _INTERNAL_ERROR)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods both read as "no such route"
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            logger.info("404 - Route not found: %s %s", request.method, request.url.path)
            return _respond(
                status.HTTP_404_NOT_FOUND,
                ErrorResponse(
                    error="Not found",
                    message=f"Route {request.method} {request.url.path} not found",
                ),
            )
        return _respond(
            exc.status_code,
            ErrorResponse(error=str(exc.detail), message=str(exc.detail)),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            "Unhandled exception on %s %s: %s",
            request.method, request.url.path, exc,
            exc_info=True,
        )
        return _respond(status.HTTP_500_INTERNAL_SERVER_ERROR, _INTERNAL_ERROR)
