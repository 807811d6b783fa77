"""Relational storage for derived issue, user, wallet and weekly records."""

from __future__ import annotations

from .errors import (
    PersistenceFailureReason,
    PersistenceResult,
    TimezoneAwareRequiredError,
    UpsertOutcome,
    WalletLookup,
)
from .gateway import KeyedLocks, PersistenceGateway
from .models import (
    WEEKLY_MARKER_ID,
    Base,
    IssueRecord,
    UserRecord,
    UTCDateTime,
    WalletRecord,
    WeeklyMarker,
    init_storage,
)
from .rows import IssueAdditions, IssueRow, UserAdditions, UserRow, issue_row, user_row

__all__ = [
    "WEEKLY_MARKER_ID",
    "Base",
    "IssueAdditions",
    "IssueRecord",
    "IssueRow",
    "KeyedLocks",
    "PersistenceFailureReason",
    "PersistenceGateway",
    "PersistenceResult",
    "TimezoneAwareRequiredError",
    "UTCDateTime",
    "UpsertOutcome",
    "UserAdditions",
    "UserRecord",
    "UserRow",
    "WalletLookup",
    "WalletRecord",
    "WeeklyMarker",
    "init_storage",
    "issue_row",
    "user_row",
]
