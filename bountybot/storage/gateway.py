"""Natural-key upsert protocol for derived records.

Every write follows the same select-then-branch shape: look the row up by
its natural key, overwrite it at its identity when found, insert it
otherwise. The two steps are serialised per natural key within the process,
and the unique constraints on the natural-key columns catch races with
other processes; an insert that loses such a race falls back to the update
branch once.

Gateway writes never raise. Store failures, and source entities whose
timestamps cannot be parsed into a row, are logged and returned as a failed
:class:`~bountybot.storage.errors.PersistenceResult`.
"""

from __future__ import annotations

import asyncio
import dataclasses as dc
import typing as typ
import weakref

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from bountybot.common.time import utcnow
from bountybot.logging import get_logger, log_info, log_warning
from bountybot.storage.errors import PersistenceResult, WalletLookup
from bountybot.storage.models import (
    WEEKLY_MARKER_ID,
    IssueRecord,
    UserRecord,
    WalletRecord,
    WeeklyMarker,
)
from bountybot.storage.rows import issue_row, user_row

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
    from sqlalchemy.orm import InstrumentedAttribute

    from bountybot.github.models import Issue, UserProfile
    from bountybot.storage.models import Base
    from bountybot.storage.rows import IssueAdditions, UserAdditions

SessionFactory: typ.TypeAlias = "async_sessionmaker[AsyncSession]"

logger = get_logger(__name__)


class KeyedLocks:
    """Per-(table, key) asyncio locks, dropped once no caller holds them."""

    def __init__(self) -> None:
        """Create an empty lock registry."""
        self._locks: weakref.WeakValueDictionary[tuple[str, object], asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def lock(self, table: str, key: object) -> asyncio.Lock:
        """Return the lock guarding ``key`` in ``table``."""
        lock = self._locks.get((table, key))
        if lock is None:
            lock = asyncio.Lock()
            self._locks[(table, key)] = lock
        return lock


@dc.dataclass(frozen=True, slots=True)
class _UpsertSpec:
    """What to write and how to find the existing row."""

    model: type[Base]
    key_column: InstrumentedAttribute[typ.Any]
    identity_column: InstrumentedAttribute[typ.Any]
    key: int | str
    values: dict[str, typ.Any]
    insert_only: dict[str, typ.Any] = dc.field(default_factory=dict)

    @property
    def table(self) -> str:
        return self.model.__tablename__


class PersistenceGateway:
    """Create-or-update derived records by natural key.

    Parameters
    ----------
    session_factory
        Async session factory bound to the bot's database.
    clock
        Source of "now" for wallet timestamps; injectable for tests.

    """

    def __init__(
        self,
        session_factory: SessionFactory,
        *,
        clock: cabc.Callable[[], dt.datetime] = utcnow,
    ) -> None:
        """Store the session factory and clock."""
        self._session_factory = session_factory
        self._clock = clock
        self._locks = KeyedLocks()

    async def upsert_issue(
        self, issue: Issue, additions: IssueAdditions
    ) -> PersistenceResult:
        """Insert or overwrite the ``issues`` row for ``issue.number``."""
        try:
            row = issue_row(issue, additions)
        except ValueError as exc:
            return self._rejected(IssueRecord, issue.number, exc)
        return await self._upsert(
            _UpsertSpec(
                model=IssueRecord,
                key_column=IssueRecord.issue_number,
                identity_column=IssueRecord.id,
                key=row.issue_number,
                values=row.values(),
            )
        )

    async def upsert_user(
        self, profile: UserProfile, additions: UserAdditions | None = None
    ) -> PersistenceResult:
        """Insert or overwrite the ``users`` row for ``profile.login``."""
        try:
            row = user_row(profile, additions)
        except ValueError as exc:
            return self._rejected(UserRecord, profile.login, exc)
        return await self._upsert(
            _UpsertSpec(
                model=UserRecord,
                key_column=UserRecord.user_login,
                identity_column=UserRecord.id,
                key=row.user_login,
                values=row.values(),
            )
        )

    async def upsert_wallet_address(
        self, username: str, address: str
    ) -> PersistenceResult:
        """Link ``address`` to ``username``.

        ``created_at`` is only written by the insert branch; ``updated_at``
        is refreshed on every write.
        """
        now = self._clock()
        return await self._upsert(
            _UpsertSpec(
                model=WalletRecord,
                key_column=WalletRecord.user_name,
                identity_column=WalletRecord.user_name,
                key=username,
                values={"wallet_address": address, "updated_at": now},
                insert_only={"user_name": username, "created_at": now},
            )
        )

    async def lookup_wallet_address(self, username: str) -> WalletLookup:
        """Read the wallet linked to ``username``, reporting store failures."""
        try:
            async with self._session_factory() as session:
                address = await session.scalar(
                    select(WalletRecord.wallet_address).where(
                        WalletRecord.user_name == username
                    )
                )
        except SQLAlchemyError as exc:
            log_warning(
                logger,
                "Wallet lookup for %s failed: %s",
                username,
                exc,
                exc_info=exc,
            )
            return WalletLookup.failure(exc)
        return WalletLookup(address=address)

    async def get_wallet_address(self, username: str) -> str | None:
        """Return the wallet linked to ``username``, or ``None``.

        A failed read also yields ``None``; use :meth:`lookup_wallet_address`
        where the difference matters.
        """
        return (await self.lookup_wallet_address(username)).address

    async def get_max_issue_number(self) -> int:
        """Return the highest stored issue number, or 0 for an empty table.

        This is a watermark only; concurrent inserts may overtake it.
        """
        try:
            async with self._session_factory() as session:
                value = await session.scalar(
                    select(IssueRecord.issue_number)
                    .order_by(IssueRecord.issue_number.desc())
                    .limit(1)
                )
        except SQLAlchemyError as exc:
            log_warning(logger, "Max issue number lookup failed: %s", exc, exc_info=exc)
            return 0
        return 0 if value is None else int(value)

    async def get_last_weekly_time(self) -> int:
        """Return the last weekly update time in epoch seconds, or 0."""
        try:
            async with self._session_factory() as session:
                value = await session.scalar(
                    select(WeeklyMarker.last_time).where(
                        WeeklyMarker.id == WEEKLY_MARKER_ID
                    )
                )
        except SQLAlchemyError as exc:
            log_warning(logger, "Weekly time lookup failed: %s", exc, exc_info=exc)
            return 0
        return 0 if value is None else int(value)

    async def update_last_weekly_time(self, time: int) -> PersistenceResult:
        """Write ``time`` to the singleton weekly marker, creating it if absent."""
        return await self._upsert(
            _UpsertSpec(
                model=WeeklyMarker,
                key_column=WeeklyMarker.id,
                identity_column=WeeklyMarker.id,
                key=WEEKLY_MARKER_ID,
                values={"last_time": time},
                insert_only={"id": WEEKLY_MARKER_ID},
            )
        )

    @staticmethod
    def _rejected(
        model: type[Base], key: int | str, exc: ValueError
    ) -> PersistenceResult:
        """Report a row that could not be derived from its source entity."""
        result = PersistenceResult.rejected(exc)
        log_warning(
            logger,
            "Upserting %s key=%r failed (%s): %s",
            model.__tablename__,
            key,
            result.reason,
            exc,
            exc_info=exc,
        )
        return result

    async def _upsert(self, spec: _UpsertSpec) -> PersistenceResult:
        """Run the select-then-branch protocol under the natural-key lock."""
        async with self._locks.lock(spec.table, spec.key):
            try:
                result = await self._select_then_write(spec)
            except SQLAlchemyError as exc:
                result = PersistenceResult.failure(exc)
                log_warning(
                    logger,
                    "Upserting %s %s=%r failed (%s): %s",
                    spec.table,
                    spec.key_column.key,
                    spec.key,
                    result.reason,
                    exc,
                    exc_info=exc,
                )
                return result

        log_info(
            logger,
            "Upserting %s %s=%r done: %s (key=%r)",
            spec.table,
            spec.key_column.key,
            spec.key,
            result.outcome,
            result.row_key,
        )
        return result

    async def _select_then_write(self, spec: _UpsertSpec) -> PersistenceResult:
        async with self._session_factory() as session, session.begin():
            identity = await self._find_identity(session, spec)
            if identity is None:
                try:
                    async with session.begin_nested():
                        record = spec.model(**spec.insert_only, **spec.values)
                        session.add(record)
                        await session.flush()
                except IntegrityError:
                    # Another writer inserted the key between our select and insert.
                    identity = await self._find_identity(session, spec)
                    if identity is None:
                        raise
                else:
                    return PersistenceResult.inserted(
                        getattr(record, spec.identity_column.key)
                    )

            await session.execute(
                update(spec.model)
                .where(spec.identity_column == identity)
                .values(**spec.values)
                .execution_options(synchronize_session=False)
            )
            return PersistenceResult.updated(identity)

    @staticmethod
    async def _find_identity(
        session: AsyncSession, spec: _UpsertSpec
    ) -> int | str | None:
        return await session.scalar(
            select(spec.identity_column).where(spec.key_column == spec.key)
        )
