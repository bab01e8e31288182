"""
Error taxonomy + FastAPI exception handlers.

Handlers and services raise the `UsersApiError` subclasses below; the
handlers registered by `register_exception_handlers()` turn them into a
structured JSON body at the HTTP boundary:

    {"detail": "...", "code": "...", ...extra}
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

log = logging.getLogger(__name__)


class UsersApiError(Exception):
    """Base class – carries everything needed to build the response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "USERS_API_ERROR"

    def __init__(self, message: str, *, headers: dict[str, str] | None = None):
        super().__init__(message)
        self.message = message
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "code": self.code}


class ValidationError(UsersApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"

    def __init__(self, errors: list[str]):
        super().__init__("Validation failed")
        self.errors = list(errors)

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "errors": self.errors}


class ConflictError(UsersApiError):
    status_code = status.HTTP_409_CONFLICT
    code = "EMAIL_CONFLICT"

    def __init__(self, message: str = "Email already in use"):
        super().__init__(message)


class NotFoundError(UsersApiError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class AuthenticationError(UsersApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


# ───────────────────────────── handlers ──────────────────────────────
async def users_api_error_handler(request: Request, exc: UsersApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Malformed JSON bodies (wrong types, missing body…) are reported in the
    same 400 shape as our own validation errors instead of FastAPI's 422.
    """
    errors = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        errors.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return await users_api_error_handler(request, ValidationError(errors))


async def persistence_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # never leak driver / SQL detail to the client
    log.error("persistence failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "code": "INTERNAL_ERROR"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UsersApiError, users_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, persistence_error_handler)
