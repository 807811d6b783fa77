"""Common time utilities."""

from __future__ import annotations

import datetime as dt


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp suitable for DB defaults."""
    return dt.datetime.now(dt.UTC)


def to_epoch_seconds(value: dt.datetime) -> int:
    """Convert an aware datetime into whole epoch seconds."""
    if value.tzinfo is None:
        msg = "value must be timezone aware"
        raise ValueError(msg)
    return int(value.timestamp())


def parse_github_datetime(value: str | None) -> dt.datetime | None:
    """Parse a GitHub ISO-8601 timestamp (``2024-07-01T10:00:00Z``) into UTC.

    ``None`` passes through so optional payload fields such as ``closed_at``
    can be handed over unchecked.
    """
    if value is None:
        return None
    parsed = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        msg = f"GitHub datetime missing timezone: {value}"
        raise ValueError(msg)
    return parsed.astimezone(dt.UTC)


def format_us_date(value: dt.datetime) -> str:
    """Render a date the way en-US locales do (``M/D/YYYY``), in UTC."""
    utc_value = value.astimezone(dt.UTC)
    return f"{utc_value.month}/{utc_value.day}/{utc_value.year}"
