"""Storage-layer error and result types.

Store failures never propagate out of the persistence gateway; they are
reported as :class:`PersistenceResult` values carrying a machine-readable
reason so callers can decide what to do with them.
"""

from __future__ import annotations

import dataclasses as dc
import enum

from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)


class TimezoneAwareRequiredError(ValueError):
    """Raised when datetime inputs lack timezone information."""

    def __init__(self, context: str) -> None:
        """Attach a consistent message for the failing context."""
        super().__init__(f"{context} must be timezone aware")

    @classmethod
    def for_column(cls) -> TimezoneAwareRequiredError:
        """Return an error indicating a bound column value was naive."""
        return cls("datetime column values")


class UpsertOutcome(enum.StrEnum):
    """Which branch of the select-then-write protocol ran."""

    INSERTED = "inserted"
    UPDATED = "updated"


class PersistenceFailureReason(enum.StrEnum):
    """Machine-readable reasons for store failures."""

    INTEGRITY = "integrity"
    CONNECTIVITY = "connectivity"
    DATABASE = "database"
    INVALID_ROW = "invalid_row"


_EXCEPTION_REASON_MAP: tuple[
    tuple[type[SQLAlchemyError], PersistenceFailureReason], ...
] = (
    (IntegrityError, PersistenceFailureReason.INTEGRITY),
    (OperationalError, PersistenceFailureReason.CONNECTIVITY),
    (InterfaceError, PersistenceFailureReason.CONNECTIVITY),
)


def categorize_store_error(exc: SQLAlchemyError) -> PersistenceFailureReason:
    """Classify a store exception."""
    for exc_type, reason in _EXCEPTION_REASON_MAP:
        if isinstance(exc, exc_type):
            return reason
    return PersistenceFailureReason.DATABASE


@dc.dataclass(frozen=True, slots=True)
class PersistenceResult:
    """Outcome of a gateway write.

    Attributes
    ----------
    outcome
        Branch taken on success, ``None`` on failure.
    row_key
        Surrogate key of the written row, or the natural key for tables
        without one.
    reason
        Failure classification, ``None`` on success.
    message
        Failure detail, ``None`` on success.

    """

    outcome: UpsertOutcome | None = None
    row_key: int | str | None = None
    reason: PersistenceFailureReason | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        """Return True when the write succeeded."""
        return self.reason is None

    @classmethod
    def inserted(cls, row_key: int | str) -> PersistenceResult:
        """Create a result for the insert branch."""
        return cls(outcome=UpsertOutcome.INSERTED, row_key=row_key)

    @classmethod
    def updated(cls, row_key: int | str) -> PersistenceResult:
        """Create a result for the update branch."""
        return cls(outcome=UpsertOutcome.UPDATED, row_key=row_key)

    @classmethod
    def failure(cls, exc: SQLAlchemyError) -> PersistenceResult:
        """Create a failed result from a store exception."""
        return cls(reason=categorize_store_error(exc), message=str(exc))

    @classmethod
    def rejected(cls, exc: ValueError) -> PersistenceResult:
        """Create a failed result for a row that could not be derived."""
        return cls(reason=PersistenceFailureReason.INVALID_ROW, message=str(exc))


@dc.dataclass(frozen=True, slots=True)
class WalletLookup:
    """Outcome of a wallet read.

    ``address`` is ``None`` both when no wallet is linked and when the read
    failed; ``ok`` tells the two apart.
    """

    address: str | None = None
    reason: PersistenceFailureReason | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        """Return True when the read reached the store."""
        return self.reason is None

    @classmethod
    def failure(cls, exc: SQLAlchemyError) -> WalletLookup:
        """Create a failed lookup from a store exception."""
        return cls(reason=categorize_store_error(exc), message=str(exc))
