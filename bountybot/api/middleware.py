"""Lifespan middleware owning the runtime's engine and tracker client.

Falcon calls :meth:`process_startup` once before serving, which creates
missing tables, and :meth:`process_shutdown` on exit, which releases the
HTTP client and the connection pool.

Usage
-----
::

    lifespan = RuntimeLifespan(engine, tracker)
    app = falcon.asgi.App(middleware=[lifespan])

"""

from __future__ import annotations

import typing as typ

from bountybot.logging import get_logger, log_info
from bountybot.storage.models import init_storage

if typ.TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from bountybot.github.client import GitHubRestClient

__all__ = ["RuntimeLifespan"]

logger = get_logger(__name__)


class RuntimeLifespan:
    """Falcon middleware tying storage and tracker resources to the app lifespan.

    Parameters
    ----------
    engine
        Async engine bound to the bot's database.
    tracker
        REST client closed on shutdown.

    """

    def __init__(self, engine: AsyncEngine, tracker: GitHubRestClient) -> None:
        """Store the resources managed across the lifespan."""
        self._engine = engine
        self._tracker = tracker

    async def process_startup(self, _scope: object, _event: object) -> None:
        """Create any missing tables before the first delivery."""
        await init_storage(self._engine)
        log_info(logger, "Storage ready at %s", self._engine.url.render_as_string())

    async def process_shutdown(self, _scope: object, _event: object) -> None:
        """Close the tracker client and dispose of the engine."""
        await self._tracker.aclose()
        await self._engine.dispose()
        log_info(logger, "Runtime resources released")
