"""Unit tests for the bountybot.runtime module."""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

import falcon.asgi
import falcon.testing
import pytest

from bountybot.config.settings import BotSettings
from bountybot.github.errors import GitHubConfigError
from bountybot.runtime import _parse_port, create_app

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> falcon.testing.TestClient:
    """Create a test client for the runtime app without a database."""
    monkeypatch.delenv("BOUNTYBOT_DATABASE_URL", raising=False)
    return falcon.testing.TestClient(create_app())


def test_create_app_returns_falcon_app(client: falcon.testing.TestClient) -> None:
    assert isinstance(client.app, falcon.asgi.App)


def test_health_only_without_database(client: falcon.testing.TestClient) -> None:
    assert client.simulate_get("/health").status_code == HTTPStatus.OK
    assert client.simulate_get("/ready").json == {"status": "ready", "webhooks": False}
    assert client.simulate_post("/webhooks").status_code == HTTPStatus.NOT_FOUND


def test_full_app_with_database(tmp_path: Path) -> None:
    settings = BotSettings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'runtime.db'}",
        repo_owner="octo",
        repo_name="bounties",
        github_token="test-token",  # noqa: S106 - placeholder
    )

    client = falcon.testing.TestClient(create_app(settings))

    assert client.simulate_get("/ready").json == {"status": "ready", "webhooks": True}


def test_full_app_requires_tracker_credentials(tmp_path: Path) -> None:
    settings = BotSettings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'runtime.db'}",
        repo_owner="octo",
        repo_name="bounties",
    )

    with pytest.raises(GitHubConfigError, match="TOKEN"):
        create_app(settings)


@pytest.mark.parametrize(("raw", "port"), [("8080", 8080), ("1", 1), ("65535", 65535)])
def test_parse_port_accepts_valid_ports(raw: str, port: int) -> None:
    assert _parse_port(raw) == port


@pytest.mark.parametrize("raw", ["0", "65536", "http", ""])
def test_parse_port_rejects_invalid_ports(raw: str) -> None:
    with pytest.raises(SystemExit):
        _parse_port(raw)
