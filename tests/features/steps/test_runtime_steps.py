"""Behavioural coverage for the bountybot runtime service."""

from __future__ import annotations

import json
import typing as typ

import falcon.testing
import pytest
from pytest_bdd import given, parsers, scenario, then, when
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from bountybot.api.webhooks import EVENT_HEADER
from bountybot.config.settings import BotSettings
from bountybot.runtime import create_app
from bountybot.storage import init_storage
from tests.fixtures.events import issue_payload
from tests.helpers import run_async

if typ.TYPE_CHECKING:
    from pathlib import Path

    from falcon.testing.client import Result


class RuntimeContext(typ.TypedDict, total=False):
    """Shared mutable scenario state."""

    client: falcon.testing.TestClient
    response: Result


@scenario(
    "../runtime.feature",
    "Health endpoint returns ok status",
)
def test_health_endpoint_returns_ok() -> None:
    """Wrap the pytest-bdd scenario for health endpoint."""


@scenario(
    "../runtime.feature",
    "Ready endpoint reports webhook handling",
)
def test_ready_endpoint_reports_webhooks() -> None:
    """Wrap the pytest-bdd scenario for ready endpoint."""


@scenario(
    "../runtime.feature",
    "Webhook deliveries are accepted",
)
def test_webhook_deliveries_accepted() -> None:
    """Wrap the pytest-bdd scenario for webhook deliveries."""


@pytest.fixture
def runtime_context() -> RuntimeContext:
    """Provide empty scenario state."""
    return {}


@given("a running bountybot app without a database")
def given_health_only_app(
    runtime_context: RuntimeContext, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Build the runtime app with no database configured."""
    monkeypatch.delenv("BOUNTYBOT_DATABASE_URL", raising=False)
    runtime_context["client"] = falcon.testing.TestClient(create_app())


@given("a running bountybot app with a database")
def given_full_app(runtime_context: RuntimeContext, tmp_path: Path) -> None:
    """Build the runtime app over a freshly initialised SQLite file."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'runtime.db'}"

    async def _init() -> None:
        engine = create_async_engine(url, poolclass=NullPool)
        try:
            await init_storage(engine)
        finally:
            await engine.dispose()

    run_async(_init)
    settings = BotSettings(
        database_url=url,
        repo_owner="octo",
        repo_name="bounties",
        github_token="runtime-test-token",  # noqa: S106 - placeholder
    )
    runtime_context["client"] = falcon.testing.TestClient(create_app(settings))


@when(parsers.parse("I request GET {path}"))
def when_request_get(runtime_context: RuntimeContext, path: str) -> None:
    """Issue a GET request to the given path."""
    runtime_context["response"] = runtime_context["client"].simulate_get(path)


@when(parsers.parse('I deliver an "{event_name}" event with action "{action}"'))
def when_deliver(runtime_context: RuntimeContext, event_name: str, action: str) -> None:
    """POST a webhook delivery for an unassigned issue."""
    body = json.dumps({"action": action, "issue": issue_payload(5)})
    runtime_context["response"] = runtime_context["client"].simulate_post(
        "/webhooks", body=body, headers={EVENT_HEADER: event_name}
    )


@then(parsers.parse("the response status is {status:d}"))
def then_response_status(runtime_context: RuntimeContext, status: int) -> None:
    """Assert the HTTP response status code."""
    response = runtime_context["response"]
    assert response.status_code == status, (
        f"expected status {status}, got {response.status_code}"
    )


@then(parsers.parse('the response field "{field}" is "{value}"'))
def then_response_field(
    runtime_context: RuntimeContext, field: str, value: str
) -> None:
    """Assert one field of the JSON response body."""
    response = runtime_context["response"]
    assert response.json[field] == value, f"got {response.json}"
