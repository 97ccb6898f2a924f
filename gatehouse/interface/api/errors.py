"""Error handlers mapping the domain error taxonomy onto HTTP responses.

Every error leaves the API as ``{"error": "<message>"}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from gatehouse.domain.error import (
    AuthenticationError,
    DatabaseError,
    DomainError,
    InternalError,
    ValidationError,
)
from gatehouse.util.error import ConfigError

logger = logging.getLogger(__name__)

DATABASE_UNAVAILABLE = "Database error, please retry"
INTERNAL_ERROR = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the error envelope."""
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def handle_authentication_error(
    request: Request, exc: AuthenticationError
) -> JSONResponse:
    return error_response(status.HTTP_401_UNAUTHORIZED, exc.message)


async def handle_database_error(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.warning(f"Database error on {request.url.path}: {exc}")
    return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, DATABASE_UNAVAILABLE)


async def handle_internal_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Internal error on {request.url.path}: {exc!r}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report the first offending field of a malformed request body."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"
    return error_response(status.HTTP_400_BAD_REQUEST, message)


def register_error_handlers(app: FastAPI) -> None:
    """Register handlers for every error kind.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(AuthenticationError, handle_authentication_error)
    app.add_exception_handler(DatabaseError, handle_database_error)
    app.add_exception_handler(InternalError, handle_internal_error)
    app.add_exception_handler(ConfigError, handle_internal_error)
    # Any DomainError subclass not matched above
    app.add_exception_handler(DomainError, handle_internal_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_internal_error)
