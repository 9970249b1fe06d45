"""Service-level error kinds and their HTTP rendering."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base for errors raised by the stores; carries the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ServiceError):
    """Malformed or missing input that slipped past request validation."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class ConflictError(ServiceError):
    """Duplicate username or email."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ServiceError):
    """Unknown resource, or one owned by somebody else."""

    status_code = status.HTTP_404_NOT_FOUND


class AuthenticationError(ServiceError):
    """Bad credentials, or a missing/invalid bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED


class UnexpectedError(ServiceError):
    """Any other failure, including store errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            extra={"path": request.url.path, "reason": exc.message[:500]},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Render ServiceError subclasses and raw store failures as JSON responses."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
