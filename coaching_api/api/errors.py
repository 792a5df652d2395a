"""
API error types and their JSON rendering.

Errors carry their HTTP status; the handlers registered in `main` turn
them into `{"error": ...}` bodies.
"""

import logging
from typing import Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Body of every 4xx response."""
    error: str
    details: Optional[str] = None


class ApiError(Exception):
    """Base for errors that map straight onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class AuthenticationError(ApiError):
    """The caller could not be resolved to a user."""
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ApiError):
    """The caller's role grants no access to this endpoint."""
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class ResourceNotFoundError(ApiError):
    """The record doesn't exist or isn't visible to the caller."""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str) -> None:
        super().__init__(f"{resource} not found")


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    content = {"error": exc.message}
    if exc.details is not None:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


# Shared OpenAPI entries for route decorators
ERROR_RESPONSES = {
    401: {
        "description": "Missing or invalid X-User-Id header",
        "model": ErrorResponse,
    },
    403: {
        "description": "Access denied for user role",
        "model": ErrorResponse,
    },
}
