"""Centralized error translation.

Every exception that escapes a route, whether raised by a service, by request
validation, by the database or by the framework, is turned into an
``AppError`` here. It is then rendered as the only error shape clients ever
see: {"success": false, "error": "<message>"}.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from devcamper.exceptions import (
    AppError,
    DuplicateKeyError,
    HTTPError,
    ServerError,
    ValidationFailedError,
)
from devcamper.logging import get_logger
from devcamper.schemas.error import ErrorResponse

logger = get_logger(__name__)

# SQLSTATE for unique_violation (PostgreSQL); SQLite only reports it in the message
_UNIQUE_VIOLATION = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    original = exc.orig
    code = getattr(original, "sqlstate", None) or getattr(original, "pgcode", None)
    return code == _UNIQUE_VIOLATION or "UNIQUE constraint failed" in str(original)


def _describe(error: dict[str, Any]) -> str:
    # loc starts with where the value came from (body, query, path); the rest is the field path
    location = [str(part) for part in error.get("loc", ())[1:]]
    message = str(error.get("msg", "Invalid value"))
    return f"{'.'.join(location)}: {message}" if location else message


def translate(exc: Exception) -> AppError:
    """Map any exception onto the application error it represents."""
    match exc:
        case AppError():
            return exc
        case RequestValidationError():
            return ValidationFailedError([_describe(error) for error in exc.errors()])
        case IntegrityError() if _is_unique_violation(exc):
            return DuplicateKeyError()
        case IntegrityError():
            return ValidationFailedError("Invalid reference or missing field")
        case StarletteHTTPException():
            error = HTTPError(str(exc.detail), exc.status_code)
            error.headers = exc.headers
            return error
        case _:
            return ServerError()


async def error_translator(request: Request, exc: Exception) -> JSONResponse:
    """Exception handler registered for every error type the app can raise."""
    error = translate(exc)
    if error.status_code >= 500:
        logger.error(
            "request_error",
            kind=error.kind,
            path=request.url.path,
            method=request.method,
            exc_info=exc,
        )
    else:
        logger.warning("request_rejected", kind=error.kind, error=error.message, path=request.url.path)

    return JSONResponse(
        status_code=error.status_code,
        content=ErrorResponse(error=error.message).model_dump(),
        headers=error.headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    for exc_type in (
        AppError,
        RequestValidationError,
        IntegrityError,
        StarletteHTTPException,
        Exception,
    ):
        app.add_exception_handler(exc_type, error_translator)
