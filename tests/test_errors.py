import json

import pytest
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from devcamper.errors import error_translator, register_error_handlers, translate
from devcamper.exceptions import (
    BadIdentifierError,
    DuplicateKeyError,
    ErrorKind,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    ValidationFailedError,
)
from devcamper.middleware import RequestIDMiddleware


class _UniqueViolation(Exception):
    sqlstate = "23505"


def _request() -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/api/v1/bootcamps",
        "query_string": b"",
        "headers": [],
    }
    return Request(scope)


# ---------------------------------------------------------------------------
# translate()
# ---------------------------------------------------------------------------
def test_app_errors_pass_through() -> None:
    error = NotFoundError.for_resource("Bootcamp", "5d713995b721c3bb38c1f5d0")
    assert translate(error) is error
    assert error.status_code == 404
    assert error.message == "Bootcamp not found with id: 5d713995b721c3bb38c1f5d0"


def test_bad_identifier() -> None:
    error = translate(BadIdentifierError("123"))
    assert error.kind is ErrorKind.BAD_IDENTIFIER
    assert (error.status_code, error.message) == (404, "Resource not found with id: 123")


def test_request_validation_messages_are_joined() -> None:
    exc = RequestValidationError(
        [
            {"type": "missing", "loc": ("body", "name"), "msg": "Field required", "input": {}},
            {
                "type": "less_than_equal",
                "loc": ("body", "rating"),
                "msg": "Input should be less than or equal to 10",
                "input": 11,
            },
        ]
    )
    error = translate(exc)
    assert isinstance(error, ValidationFailedError)
    assert error.status_code == 400
    assert error.message == "name: Field required, rating: Input should be less than or equal to 10"


@pytest.mark.parametrize(
    "orig",
    [_UniqueViolation("duplicate key"), Exception("UNIQUE constraint failed: bootcamps.name")],
    ids=["postgres", "sqlite"],
)
def test_unique_violation_is_duplicate_key(orig: Exception) -> None:
    error = translate(IntegrityError("INSERT ...", {}, orig))
    assert isinstance(error, DuplicateKeyError)
    assert (error.status_code, error.message) == (400, "Duplicate field value entered")


def test_other_integrity_error_is_validation_failure() -> None:
    error = translate(IntegrityError("INSERT ...", {}, Exception("FOREIGN KEY constraint failed")))
    assert error.kind is ErrorKind.VALIDATION_FAILED
    assert error.status_code == 400


def test_framework_http_error_keeps_status() -> None:
    error = translate(StarletteHTTPException(405, "Method Not Allowed"))
    assert (error.status_code, error.message) == (405, "Method Not Allowed")


def test_unknown_exception_is_server_error() -> None:
    error = translate(ZeroDivisionError("division by zero"))
    assert isinstance(error, ServerError)
    assert (error.status_code, error.message) == (500, "Server Error")


# ---------------------------------------------------------------------------
# error_translator(): the response body and headers
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_error_translator_renders_envelope() -> None:
    response = await error_translator(_request(), ValidationFailedError(["a", "b"]))
    assert response.status_code == 400
    assert json.loads(response.body) == {"success": False, "error": "a, b"}


@pytest.mark.asyncio
async def test_error_translator_hides_internal_details() -> None:
    response = await error_translator(_request(), RuntimeError("connection string leaked"))
    assert response.status_code == 500
    assert json.loads(response.body) == {"success": False, "error": "Server Error"}


@pytest.mark.asyncio
async def test_error_translator_sets_challenge_header() -> None:
    response = await error_translator(_request(), UnauthorizedError())
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


# ---------------------------------------------------------------------------
# Through the app
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client: AsyncClient) -> None:
    resp = await client.get("/api/v1/nowhere")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Not Found"}


@pytest.mark.asyncio
async def test_response_carries_request_id(client: AsyncClient) -> None:
    resp = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert resp.headers["x-request-id"] == "abc123"


@pytest.mark.asyncio
async def test_unhandled_exception_is_tagged_with_request_id() -> None:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("lost the database")

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.get("/boom", headers={"X-Request-ID": "req-500"})

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Server Error"}
    assert resp.headers["x-request-id"] == "req-500"
