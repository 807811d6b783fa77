"""Unit tests for bountybot.api.errors exceptions and error handlers."""

from __future__ import annotations

import falcon.asgi
import falcon.testing
import pytest

from bountybot.api.errors import (
    InvalidInputError,
    InvalidSignatureError,
    handle_invalid_input,
    handle_invalid_signature,
)


class _BadRequestResource:
    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        msg = "invalid parameter"
        raise InvalidInputError(msg)


class _BadRequestWithFieldResource:
    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        raise InvalidInputError("header is required", field="X-GitHub-Event")


class _BadSignatureResource:
    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        raise InvalidSignatureError.mismatch()


@pytest.fixture
def client() -> falcon.testing.TestClient:
    """Build a test client with error handlers registered."""
    app = falcon.asgi.App()
    app.add_route("/bad-request", _BadRequestResource())
    app.add_route("/bad-request-field", _BadRequestWithFieldResource())
    app.add_route("/bad-signature", _BadSignatureResource())
    app.add_error_handler(InvalidInputError, handle_invalid_input)
    app.add_error_handler(InvalidSignatureError, handle_invalid_signature)
    return falcon.testing.TestClient(app)


def test_invalid_input_without_field(client: falcon.testing.TestClient) -> None:
    result = client.simulate_get("/bad-request")
    assert result.status == falcon.HTTP_400
    assert result.json == {"title": "Invalid input", "description": "invalid parameter"}


def test_invalid_input_names_the_field(client: falcon.testing.TestClient) -> None:
    result = client.simulate_get("/bad-request-field")
    assert result.status == falcon.HTTP_400
    assert result.json["field"] == "X-GitHub-Event"
    assert result.json["description"] == "header is required"


def test_invalid_signature_maps_to_401(client: falcon.testing.TestClient) -> None:
    result = client.simulate_get("/bad-signature")
    assert result.status == falcon.HTTP_401
    assert result.json == {
        "title": "Invalid signature",
        "description": "signature does not match payload",
    }


def test_invalid_input_message_includes_field() -> None:
    assert str(InvalidInputError("required", field="body")) == "body: required"
