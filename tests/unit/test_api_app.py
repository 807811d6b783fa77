"""Unit tests for bountybot.api.app application factory."""

from __future__ import annotations

from unittest import mock

import falcon.asgi
import falcon.testing
import pytest

from bountybot.api.app import AppDependencies, create_app


@pytest.fixture
def health_client() -> falcon.testing.TestClient:
    """Build a test client for health-only mode."""
    return falcon.testing.TestClient(create_app())


@pytest.fixture
def full_client() -> falcon.testing.TestClient:
    """Build a test client with a stand-in executor."""
    executor = mock.MagicMock()
    return falcon.testing.TestClient(create_app(AppDependencies(executor=executor)))


class TestCreateAppHealthOnly:
    """create_app() without an executor."""

    def test_returns_falcon_app(self) -> None:
        assert isinstance(create_app(), falcon.asgi.App)

    def test_has_health_route(self, health_client: falcon.testing.TestClient) -> None:
        result = health_client.simulate_get("/health")
        assert result.status == falcon.HTTP_200
        assert result.json == {"status": "ok"}

    def test_ready_reports_no_webhooks(
        self, health_client: falcon.testing.TestClient
    ) -> None:
        result = health_client.simulate_get("/ready")
        assert result.status == falcon.HTTP_200
        assert result.json == {"status": "ready", "webhooks": False}

    def test_webhook_endpoint_not_registered(
        self, health_client: falcon.testing.TestClient
    ) -> None:
        result = health_client.simulate_post("/webhooks", body=b"{}")
        assert result.status == falcon.HTTP_404


class TestCreateAppWithExecutor:
    """create_app() with an executor."""

    def test_ready_reports_webhooks(
        self, full_client: falcon.testing.TestClient
    ) -> None:
        result = full_client.simulate_get("/ready")
        assert result.json == {"status": "ready", "webhooks": True}

    def test_webhook_endpoint_registered(
        self, full_client: falcon.testing.TestClient
    ) -> None:
        # No event header: rejected by the resource rather than the router.
        result = full_client.simulate_post("/webhooks", body=b"{}")
        assert result.status == falcon.HTTP_400

    def test_extra_middleware_is_installed(self) -> None:
        class _Marker:
            calls = 0

            async def process_request(
                self, _req: falcon.asgi.Request, _resp: falcon.asgi.Response
            ) -> None:
                type(self).calls += 1

        client = falcon.testing.TestClient(create_app(middleware=[_Marker()]))
        client.simulate_get("/health")
        assert _Marker.calls == 1
