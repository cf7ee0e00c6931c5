"""Error hierarchy and FastAPI exception handlers for the mock backend.

All backend errors extend BackendError. The handlers return the body shape
the real backend uses for failures: ``{ message, result: { code, message } }``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class BackendError(Exception):
    """Base error for all mock backend errors."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.__class__.message
        super().__init__(self.message)


class MissingDeviceIdError(BackendError):
    status_code = 400
    message = "device_id is required"


class InvalidCredentialsError(BackendError):
    status_code = 404
    message = "Cannot find any user with this email & password!"


class UnauthenticatedError(BackendError):
    """Missing or invalid bearer token."""

    status_code = 401
    message = "Unauthenticated"


class UserNotFoundError(BackendError):
    status_code = 404
    message = "User not found"


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------


def error_body(status_code: int, message: str) -> JSONResponse:
    """Build a failure response in the backend's error shape."""
    return JSONResponse(
        status_code=status_code,
        content={
            "message": message,
            "result": {"code": status_code, "message": message},
        },
    )


async def _backend_error_handler(_request: Request, exc: BackendError) -> JSONResponse:
    return error_body(exc.status_code, exc.message)


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = ", ".join(".".join(str(loc) for loc in err["loc"]) for err in exc.errors())
    return error_body(422, f"Validation error: {fields}")


def register_error_handlers(app: FastAPI) -> None:
    """Wire up all exception handlers on the FastAPI application."""
    app.add_exception_handler(BackendError, _backend_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
