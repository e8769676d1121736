from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Base for errors that are rendered as structured 4xx responses."""

    status_code = 400
    code = "AppError"
    default_detail = "Request failed"

    def __init__(self, detail: Optional[str] = None, extra: Any = None):
        self.detail = detail or self.default_detail
        self.extra = extra
        super().__init__(self.detail)


class InvalidCredentials(AppError):
    status_code = 401
    code = "InvalidCredentials"
    default_detail = "Invalid username or password"


class InvalidToken(AppError):
    status_code = 401
    code = "InvalidToken"
    default_detail = "Invalid or expired token"


class UserNotFound(AppError):
    status_code = 404
    code = "UserNotFound"
    default_detail = "User not found"


class StoreNotFound(AppError):
    status_code = 404
    code = "StoreNotFound"
    default_detail = "Store not found"


class DuplicateUsername(AppError):
    status_code = 409
    code = "DuplicateUsername"
    default_detail = "Username is already taken"


class DuplicateEmail(AppError):
    status_code = 409
    code = "DuplicateEmail"
    default_detail = "Email is already in use"


class UnknownRole(AppError):
    status_code = 400
    code = "UnknownRole"
    default_detail = "Role is not found"


class PasswordMismatch(AppError):
    status_code = 400
    code = "PasswordMismatch"
    default_detail = "New password and confirmation do not match"


class InvalidRequestShape(AppError):
    status_code = 400
    code = "InvalidRequestShape"
    default_detail = "Invalid request"


def _error_body(exc: AppError) -> dict:
    body = {"detail": exc.detail, "code": exc.code}
    if exc.extra is not None:
        body["errors"] = jsonable_encoder(exc.extra)
    return body


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    error = InvalidRequestShape(extra=exc.errors())
    return JSONResponse(status_code=error.status_code, content=_error_body(error))


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
