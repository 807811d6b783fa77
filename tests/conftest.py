"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import typing as typ

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from bountybot.pipeline.models import BotServices
from bountybot.storage import PersistenceGateway, init_storage
from tests.fixtures.events import FIXED_NOW, sample_config
from tests.fixtures.tracker import FakeTracker

if typ.TYPE_CHECKING:
    from pathlib import Path

    from bountybot.config.models import BotConfig


@pytest_asyncio.fixture
async def session_factory(
    tmp_path: Path,
) -> typ.AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Yield a session factory backed by a fresh SQLite file.

    ``NullPool`` keeps no connection between sessions, so feature steps may
    drive the factory from their own event loops.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'bountybot_test.db'}",
        poolclass=NullPool,
    )
    try:
        await init_storage(engine)
        yield async_sessionmaker(engine, expire_on_commit=False)
    finally:
        await engine.dispose()


@pytest.fixture
def gateway(session_factory: async_sessionmaker[AsyncSession]) -> PersistenceGateway:
    """Persistence gateway over the test database with a fixed clock."""
    return PersistenceGateway(session_factory, clock=lambda: FIXED_NOW)


@pytest.fixture
def tracker() -> FakeTracker:
    """Tracker double recording every call."""
    return FakeTracker()


@pytest.fixture
def bot_config() -> BotConfig:
    """Configuration with two time tiers, an unscheduled tier and two priorities."""
    return sample_config()


@pytest.fixture
def services(
    bot_config: BotConfig, gateway: PersistenceGateway, tracker: FakeTracker
) -> BotServices:
    """Bot services wired to the test database, fake tracker and fixed clock."""
    return BotServices(
        config=bot_config,
        gateway=gateway,
        tracker=tracker,
        clock=lambda: FIXED_NOW,
    )
