"""Health probe resources for liveness and readiness checks.

These resources are stateless and are registered whether or not the
webhook endpoint is available.
"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = ["HealthResource", "ReadyResource"]


class HealthResource:
    """Liveness probe returning ``{"status": "ok"}``."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /health requests."""
        resp.media = {"status": "ok"}
        resp.status = HTTPStatus.OK


class ReadyResource:
    """Readiness probe reporting whether webhooks are being handled.

    Parameters
    ----------
    handles_webhooks
        ``True`` when the app was built with an executor.

    """

    def __init__(self, *, handles_webhooks: bool = False) -> None:
        """Record whether the webhook endpoint is registered."""
        self._handles_webhooks = handles_webhooks

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /ready requests."""
        resp.media = {"status": "ready", "webhooks": self._handles_webhooks}
        resp.status = HTTPStatus.OK
