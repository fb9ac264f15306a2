"""Tests for peopledir/core/exception_handlers.py."""

import json
import logging

from fastapi.testclient import TestClient
from starlette.requests import Request

from peopledir.core.exception_handlers import (
    app_exception_handler,
    format_validation_errors,
    unhandled_exception_handler,
)
from peopledir.core.exceptions import InternalError, StorageError
from peopledir.user.exceptions import EmailExistsError


def _request(path: str = "/add-user") -> Request:
    return Request(
        {
            "type": "http",
            "method": "POST",
            "path": path,
            "headers": [],
            "query_string": b"",
        }
    )


def _body(response) -> dict:
    return json.loads(response.body)


def test_format_validation_errors():
    errors = [
        {"loc": ("body", "id"), "msg": "Field required"},
        {"loc": ("teams", 0), "msg": "Input should be 'Technology'"},
        {"loc": (), "msg": "Invalid input"},
    ]

    assert format_validation_errors(errors) == (
        "id: Field required; teams.0: Input should be 'Technology'; Invalid input"
    )


def test_app_exception_client_error(caplog):
    with caplog.at_level(logging.INFO, logger="peopledir.exception"):
        response = app_exception_handler(_request(), EmailExistsError())

    assert response.status_code == 400
    assert _body(response) == {
        "type": "email_exists",
        "message": "User with this email already exists.",
    }
    assert caplog.records[-1].levelno == logging.INFO
    assert caplog.records[-1].error_type == "email_exists"


def test_app_exception_server_error_logs_cause(caplog):
    try:
        try:
            raise OSError("disk full")
        except OSError as e:
            raise StorageError() from e
    except StorageError as exc:
        with caplog.at_level(logging.ERROR, logger="peopledir.exception"):
            response = app_exception_handler(_request(), exc)

    assert response.status_code == 500
    assert _body(response)["type"] == "storage_error"
    assert caplog.records[-1].levelno == logging.ERROR
    assert caplog.records[-1].exc_info is not None


def test_app_exception_server_error_without_cause(caplog):
    with caplog.at_level(logging.ERROR, logger="peopledir.exception"):
        app_exception_handler(_request(), InternalError())

    assert not caplog.records[-1].exc_info


def test_unhandled_exception(caplog):
    with caplog.at_level(logging.ERROR, logger="peopledir.exception"):
        response = unhandled_exception_handler(_request(), RuntimeError("boom"))

    assert response.status_code == 500
    assert _body(response) == {
        "type": "internal_error",
        "message": "An unexpected error occurred",
    }
    assert "RuntimeError" in caplog.records[-1].getMessage()


def test_unknown_route_uses_error_format(client: TestClient):
    response = client.post("/no-such-route")

    assert response.status_code == 404
    assert response.json() == {"type": "http_error", "message": "Not Found"}


def test_wrong_method_uses_error_format(client: TestClient):
    response = client.get("/fetch-users")

    assert response.status_code == 405
    assert response.json()["type"] == "http_error"


def test_malformed_json_body(client: TestClient):
    response = client.post(
        "/delete-user",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["type"] == "validation_error"
