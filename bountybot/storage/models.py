"""Persistence models for derived issue, user, wallet and weekly records."""

from __future__ import annotations

import datetime as dt
import typing as typ

from sqlalchemy import (
    JSON,
    BigInteger,
    CheckConstraint,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from bountybot.storage.errors import TimezoneAwareRequiredError

if typ.TYPE_CHECKING:
    from sqlalchemy.engine import Dialect
    from sqlalchemy.ext.asyncio import AsyncEngine

WEEKLY_MARKER_ID = 1


class Base(DeclarativeBase):
    """Base declarative class for bot records."""


class UTCDateTime(TypeDecorator[dt.datetime]):
    """DateTime wrapper that round-trips UTC tzinfo even on SQLite."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(
        self, value: dt.datetime | None, dialect: Dialect
    ) -> dt.datetime | None:
        """Force bound datetime values to UTC with tzinfo."""
        if value is None:
            return None
        if value.tzinfo is None:
            raise TimezoneAwareRequiredError.for_column()
        return value.astimezone(dt.UTC)

    def process_result_value(
        self, value: dt.datetime | None, dialect: Dialect
    ) -> dt.datetime | None:
        """Ensure result datetimes are UTC and timezone aware."""
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.UTC)
        return value.astimezone(dt.UTC)


class IssueRecord(Base):
    """Projection of a tracker issue with its derived pricing labels."""

    __tablename__ = "issues"
    __table_args__ = (UniqueConstraint("issue_number", name="uq_issues_issue_number"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    issue_number: Mapped[int] = mapped_column(BigInteger)
    issue_url: Mapped[str] = mapped_column(String(512), default="")
    comments_url: Mapped[str] = mapped_column(String(512), default="")
    events_url: Mapped[str] = mapped_column(String(512), default="")
    labels: Mapped[list[str]] = mapped_column(JSON, default=list)
    assignees: Mapped[list[str]] = mapped_column(JSON, default=list)
    timeline: Mapped[str | None] = mapped_column(String(255), default=None)
    priority: Mapped[str | None] = mapped_column(String(255), default=None)
    price: Mapped[str | None] = mapped_column(String(255), default=None)
    started_at: Mapped[dt.datetime | None] = mapped_column(UTCDateTime())
    completed_at: Mapped[dt.datetime | None] = mapped_column(UTCDateTime())
    closed_at: Mapped[dt.datetime | None] = mapped_column(UTCDateTime())
    created_at: Mapped[dt.datetime | None] = mapped_column(UTCDateTime())
    updated_at: Mapped[dt.datetime | None] = mapped_column(UTCDateTime())


class UserRecord(Base):
    """Tracker user profile mirrored for analytics and payouts."""

    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("user_login", name="uq_users_user_login"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_login: Mapped[str] = mapped_column(String(255))
    user_type: Mapped[str | None] = mapped_column(String(32), default=None)
    user_name: Mapped[str | None] = mapped_column(String(255), default=None)
    company: Mapped[str | None] = mapped_column(String(255), default=None)
    blog: Mapped[str | None] = mapped_column(String(512), default=None)
    user_location: Mapped[str | None] = mapped_column(String(255), default=None)
    email: Mapped[str | None] = mapped_column(String(320), default=None)
    bio: Mapped[str | None] = mapped_column(Text(), default=None)
    twitter_username: Mapped[str | None] = mapped_column(String(255), default=None)
    public_repos: Mapped[int] = mapped_column(Integer, default=0)
    followers: Mapped[int] = mapped_column(Integer, default=0)
    following: Mapped[int] = mapped_column(Integer, default=0)
    wallet_address: Mapped[str | None] = mapped_column(String(64), default=None)
    created_at: Mapped[dt.datetime | None] = mapped_column(UTCDateTime())
    updated_at: Mapped[dt.datetime | None] = mapped_column(UTCDateTime())


class WalletRecord(Base):
    """Wallet address linked to a tracker login; the login is the key."""

    __tablename__ = "wallets"

    user_name: Mapped[str] = mapped_column(String(255), primary_key=True)
    wallet_address: Mapped[str] = mapped_column(String(64))
    created_at: Mapped[dt.datetime] = mapped_column(UTCDateTime())
    updated_at: Mapped[dt.datetime] = mapped_column(UTCDateTime())


class WeeklyMarker(Base):
    """Singleton row holding the epoch seconds of the last weekly update."""

    __tablename__ = "weekly"
    __table_args__ = (
        CheckConstraint(f"id = {WEEKLY_MARKER_ID}", name="ck_weekly_singleton"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False, default=WEEKLY_MARKER_ID
    )
    last_time: Mapped[int] = mapped_column(BigInteger, default=0)


async def init_storage(engine: AsyncEngine) -> None:
    """Create all tables registered with Base if they are absent."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
