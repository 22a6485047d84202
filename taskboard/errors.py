"""Error taxonomy and request-boundary handlers.

Every failure is terminal for the request: handlers translate the error to
``{"error": message}`` with the status carried by the exception class.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class TaskboardError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskboardError):
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidStatus(ValidationError):
    """Status is not one of the board's section ids."""

    def __init__(self, valid_ids: list[str]):
        super().__init__(f"Invalid status. Must be one of: {', '.join(valid_ids)}")
        self.valid_ids = valid_ids


class DuplicateError(TaskboardError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(TaskboardError):
    status_code = status.HTTP_400_BAD_REQUEST


class SectionInUse(ConflictError):
    """Section still referenced by tasks."""

    def __init__(self, section_name: str, count: int):
        super().__init__(
            f'Cannot delete section "{section_name}": {count} task(s) still use it. '
            "Move or delete them first."
        )
        self.count = count


class AuthError(TaskboardError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(TaskboardError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(TaskboardError):
    status_code = status.HTTP_404_NOT_FOUND


class ConfigurationError(TaskboardError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def taskboard_error_handler(request: Request, exc: TaskboardError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error_response(exc.status_code, exc.message)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Collapse pydantic errors into a single readable message."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", []) if p != "body")
        msg = str(err.get("msg", "invalid value"))
        parts.append(f"{loc}: {msg}" if loc else msg)
    return _error_response(status.HTTP_400_BAD_REQUEST, "; ".join(parts) or "Invalid request")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error mapping on the application."""
    app.add_exception_handler(TaskboardError, taskboard_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
