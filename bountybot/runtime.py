"""Bountybot runtime entrypoint.

This module keeps the ``bountybot.runtime:create_app`` Granian factory
stable and delegates construction to :mod:`bountybot.api`.

When ``BOUNTYBOT_DATABASE_URL`` is set, the runtime builds the full
pipeline (store, tracker client, executor) and serves ``POST /webhooks``.
Otherwise it starts in health-only mode.

Configuration is driven by environment variables:

- ``BOUNTYBOT_HOST``: Bind address (default ``0.0.0.0``)
- ``BOUNTYBOT_PORT``: Listen port (default ``8080``)
- ``BOUNTYBOT_LOG_LEVEL``: Log level (default ``INFO``)
- ``BOUNTYBOT_DATABASE_URL``: Database connection URL (optional)
- ``BOUNTYBOT_CONFIG_PATH``, ``BOUNTYBOT_REPOSITORY``,
  ``BOUNTYBOT_GITHUB_TOKEN``, ``BOUNTYBOT_WEBHOOK_SECRET``: see
  :class:`bountybot.config.BotSettings`

Run the service directly with ``python -m bountybot.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from bountybot.config.settings import BotSettings
from bountybot.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

__all__ = ["create_app", "main"]

logger = get_logger(__name__)

_MIN_PORT = 1
_MAX_PORT = 65535


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not a valid integer in range 1-65535.

    """
    try:
        port = int(port_str)
        if not (_MIN_PORT <= port <= _MAX_PORT):
            msg = f"port {port} outside valid range {_MIN_PORT}-{_MAX_PORT}"
            raise ValueError(msg)  # noqa: TRY301 - unify conversion and range errors
    except ValueError as exc:
        log_error(
            logger,
            "Invalid BOUNTYBOT_PORT value: %r (must be %d-%d): %s",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
            exc,
        )
        raise SystemExit(1) from exc
    return port


def create_app(settings: BotSettings | None = None) -> falcon.asgi.App:
    """Create the Falcon ASGI application from environment settings.

    Parameters
    ----------
    settings
        Deployment settings; read from the environment when ``None``.

    Returns
    -------
    falcon.asgi.App
        Health-only app without a database URL, full app otherwise.

    """
    from bountybot.api.app import create_app as _create_api_app

    settings = settings or BotSettings.from_env()
    if settings.database_url is None:
        log_info(logger, "No BOUNTYBOT_DATABASE_URL; serving health endpoints only")
        return _create_api_app()

    from bountybot.api.factory import build_runtime

    runtime = build_runtime(settings)
    return _create_api_app(runtime.dependencies, middleware=[runtime.lifespan])


def main() -> None:
    """Start the bountybot runtime server using Granian."""
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("BOUNTYBOT_HOST", "0.0.0.0")  # noqa: S104 - bind all interfaces for container
    port = _parse_port(os.environ.get("BOUNTYBOT_PORT", "8080"))
    log_level_str = os.environ.get("BOUNTYBOT_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid BOUNTYBOT_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting bountybot on %s:%d (log_level=%s)",
        host,
        port,
        normalized_level,
    )

    server = Granian(
        "bountybot.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()
