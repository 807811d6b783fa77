"""Build runtime collaborators from deployment settings.

Usage
-----
::

    from bountybot.api.factory import build_runtime

    runtime = build_runtime(BotSettings.from_env())
    app = create_app(runtime.dependencies, middleware=[runtime.lifespan])

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from bountybot.api.app import AppDependencies
from bountybot.api.middleware import RuntimeLifespan
from bountybot.config.loader import load_config
from bountybot.config.models import BotConfig
from bountybot.github.client import GitHubRestClient, GitHubRestConfig
from bountybot.github.errors import GitHubConfigError
from bountybot.handlers.processors import build_executor
from bountybot.pipeline.models import BotServices
from bountybot.storage.gateway import PersistenceGateway

if typ.TYPE_CHECKING:
    from bountybot.config.settings import BotSettings

__all__ = ["Runtime", "build_runtime"]


@dc.dataclass(frozen=True, slots=True)
class Runtime:
    """Application dependencies plus the middleware owning their resources."""

    dependencies: AppDependencies
    lifespan: RuntimeLifespan


def _tracker_config(settings: BotSettings) -> GitHubRestConfig:
    if not settings.github_token:
        raise GitHubConfigError.missing_token()
    if not settings.repo_owner or not settings.repo_name:
        raise GitHubConfigError.missing_repository()
    return GitHubRestConfig(
        token=settings.github_token,
        owner=settings.repo_owner,
        repo=settings.repo_name,
    )


def build_runtime(settings: BotSettings) -> Runtime:
    """Assemble the executor and its collaborators from ``settings``.

    Parameters
    ----------
    settings
        Deployment settings; ``database_url`` must be set.

    Raises
    ------
    GitHubConfigError
        If the token or repository is not configured.
    ConfigValidationError
        If the configuration file is unreadable or invalid.

    """
    if settings.database_url is None:
        msg = "build_runtime requires a database URL"
        raise ValueError(msg)

    config = (
        load_config(settings.config_path)
        if settings.config_path is not None
        else BotConfig()
    )
    tracker = GitHubRestClient(_tracker_config(settings))
    engine = create_async_engine(settings.database_url)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    services = BotServices(
        config=config,
        gateway=PersistenceGateway(session_factory),
        tracker=tracker,
    )
    return Runtime(
        dependencies=AppDependencies(
            executor=build_executor(services),
            webhook_secret=settings.webhook_secret,
        ),
        lifespan=RuntimeLifespan(engine, tracker),
    )
