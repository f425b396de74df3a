"""Domain error taxonomy shared by the store and service layer."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class VidHubError(Exception):
    """Base class for expected, recoverable failures raised by the core."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(VidHubError):
    """An id referenced a row that is absent from the store."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(VidHubError):
    """A uniqueness constraint would be violated (username, email, subscription)."""

    status_code = status.HTTP_409_CONFLICT


class ValidationFailedError(VidHubError):
    """Caller supplied data that violates the core's own invariants."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(VidHubError):
    """Caller does not own the resource it is trying to change."""

    status_code = status.HTTP_403_FORBIDDEN


class PersistenceError(VidHubError):
    """The snapshot could not be durably written.

    The in-memory mutation has already been applied; ``result`` holds what the
    mutation returned so callers can decide whether to retry or surface it.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, result: Any = None) -> None:
        super().__init__(message)
        self.result = result


def register_error_handlers(app: FastAPI) -> None:
    """Translate domain errors into JSON responses at the HTTP boundary."""

    @app.exception_handler(VidHubError)
    async def _vidhub_error_handler(request: Request, exc: VidHubError) -> JSONResponse:
        if isinstance(exc, PersistenceError):
            logger.error("Persistence failure on %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


__all__ = [
    "VidHubError",
    "NotFoundError",
    "ConflictError",
    "ValidationFailedError",
    "UnauthorizedError",
    "PersistenceError",
    "register_error_handlers",
]
