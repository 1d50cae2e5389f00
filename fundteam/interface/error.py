"""Interface layer errors and their HTTP mapping.

Every error response has the body ``{"error": "<message>"}``.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from fundteam.domain.error import (
    AlreadyUsedError,
    ConflictError,
    DependencyFailureError,
    DomainError,
    ExpiredError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)


class InterfaceError(Exception):
    """Base interface error."""

    pass


class UnauthorizedError(InterfaceError):
    """Request carries no valid access token."""

    pass


DOMAIN_ERROR_STATUS: dict[type[DomainError], int] = {
    ConflictError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    ExpiredError: status.HTTP_400_BAD_REQUEST,
    AlreadyUsedError: status.HTTP_400_BAD_REQUEST,
    InvalidStateError: status.HTTP_400_BAD_REQUEST,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    DependencyFailureError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error, falling back to 400."""
    for error_type in type(error).__mro__:
        if error_type in DOMAIN_ERROR_STATUS:
            return DOMAIN_ERROR_STATUS[error_type]
    return status.HTTP_400_BAD_REQUEST


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers that map errors to HTTP responses.

    Args:
        app: FastAPI application
    """

    @app.exception_handler(DomainError)
    async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
        status_code = status_for(exc)
        if status_code >= 500:
            logfire.error(
                "Request failed on a dependency",
                path=request.url.path,
                error=exc.message,
            )
        return error_response(status_code, exc.message)

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(
        request: Request, exc: UnauthorizedError
    ) -> JSONResponse:
        return error_response(status.HTTP_401_UNAUTHORIZED, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return error_response(status.HTTP_400_BAD_REQUEST, _validation_message(exc))

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(
        request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        logfire.error(
            "Database error",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE, "Service temporarily unavailable"
        )
