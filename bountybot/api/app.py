"""Application factory for the bountybot Falcon ASGI application.

Usage
-----
Create a health-only app (no executor)::

    app = create_app()

Create a full app handling webhook deliveries::

    from bountybot.api.app import AppDependencies, create_app

    app = create_app(AppDependencies(executor=executor, webhook_secret=secret))

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon.asgi

from bountybot.api.errors import (
    InvalidInputError,
    InvalidSignatureError,
    handle_invalid_input,
    handle_invalid_signature,
)
from bountybot.api.health.resources import HealthResource, ReadyResource

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bountybot.pipeline.executor import PipelineExecutor

__all__ = ["AppDependencies", "create_app"]


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Dependencies for the Falcon ASGI application.

    Attributes
    ----------
    executor
        Pipeline executor for webhook deliveries. When ``None`` only the
        health endpoints are registered.
    webhook_secret
        Optional secret used to verify delivery signatures.

    """

    executor: PipelineExecutor | None = None
    webhook_secret: str | None = None


def create_app(
    dependencies: AppDependencies | None = None,
    *,
    middleware: cabc.Sequence[object] = (),
) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    ``/health`` and ``/ready`` are always registered; ``POST /webhooks`` is
    added when *dependencies* carries an executor.

    Parameters
    ----------
    dependencies
        Optional application dependencies.
    middleware
        Extra Falcon middleware, e.g. the runtime lifespan.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    executor = dependencies.executor if dependencies is not None else None

    app = falcon.asgi.App(middleware=list(middleware))  # type: ignore[no-matching-overload]  # Falcon stubs
    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource(handles_webhooks=executor is not None))

    if executor is not None and dependencies is not None:
        from bountybot.api.webhooks import WebhookResource

        app.add_route(
            "/webhooks",
            WebhookResource(executor, secret=dependencies.webhook_secret),
        )

    app.add_error_handler(InvalidInputError, handle_invalid_input)
    app.add_error_handler(InvalidSignatureError, handle_invalid_signature)

    return app
