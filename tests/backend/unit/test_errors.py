"""
Unit tests for core.errors module.
Tests the response envelope and the status carried by each error type.
"""
import json

import pytest
from starlette.requests import Request

from billy_bingo.core.errors import (
    AppError,
    Conflict,
    NotFound,
    Unauthenticated,
    ValidationError,
    app_error_handler,
    error_body,
    unhandled_error_handler,
)


def make_request(path="/api/things"):
    return Request({"type": "http", "method": "GET", "path": path, "headers": [], "query_string": b""})


def test_error_body_shape():
    assert error_body("Nope", 404) == {
        "success": False,
        "message": "Nope",
        "error": {"message": "Nope", "statusCode": 404},
    }


@pytest.mark.parametrize(
    "error_cls, expected",
    [(ValidationError, 400), (Unauthenticated, 401), (NotFound, 404), (Conflict, 409), (AppError, 500)],
)
def test_status_codes(error_cls, expected):
    assert error_cls("x").status_code == expected


@pytest.mark.asyncio
async def test_app_error_handler_renders_envelope():
    resp = await app_error_handler(make_request(), Conflict("Email already exists"))
    assert resp.status_code == 409
    assert json.loads(resp.body) == error_body("Email already exists", 409)


@pytest.mark.asyncio
async def test_unhandled_error_hides_details():
    resp = await unhandled_error_handler(make_request(), RuntimeError("db password is hunter2"))
    assert resp.status_code == 500
    body = json.loads(resp.body)
    assert body["message"] == "Internal Server Error"
    assert "hunter2" not in resp.body.decode()
