"""Tests for deadline computation and mention text."""

from __future__ import annotations

import datetime as dt

import pytest

from bountybot.config.models import TimeLabel
from bountybot.pricing import DEADLINE_PREFIX, compute_deadline, mention_logins
from tests.fixtures.events import DAY, FIXED_NOW, UNSCHEDULED, WEEK


def test_deadline_adds_label_duration_exactly() -> None:
    deadline = compute_deadline(DAY, ["alice"], FIXED_NOW)

    assert deadline is not None
    assert deadline.deadline == FIXED_NOW + dt.timedelta(seconds=86400)
    assert deadline.deadline - FIXED_NOW == dt.timedelta(days=1)


def test_mention_text_lists_assignees_then_date() -> None:
    deadline = compute_deadline(WEEK, ["alice", "bob"], FIXED_NOW)

    assert deadline is not None
    assert deadline.mention_text == f"@alice @bob {DEADLINE_PREFIX} 7/8/2024"


def test_label_without_duration_yields_no_deadline() -> None:
    assert compute_deadline(UNSCHEDULED, ["alice"], FIXED_NOW) is None


def test_no_assignees_still_yields_a_deadline() -> None:
    deadline = compute_deadline(DAY, [], FIXED_NOW)

    assert deadline is not None
    assert deadline.deadline == FIXED_NOW + dt.timedelta(days=1)
    assert deadline.mention_text == f"{DEADLINE_PREFIX} 7/2/2024"


def test_naive_now_is_rejected() -> None:
    with pytest.raises(ValueError, match="timezone aware"):
        compute_deadline(DAY, ["alice"], dt.datetime(2024, 7, 1))  # noqa: DTZ001


def test_date_is_rendered_in_utc() -> None:
    label = TimeLabel(name="Time: 1 Hour", weight=0, value=3600)
    late_evening = dt.datetime(2024, 7, 1, 23, 30, tzinfo=dt.UTC)

    deadline = compute_deadline(label, ["alice"], late_evening)

    assert deadline is not None
    assert deadline.mention_text.endswith("7/2/2024")


def test_mention_logins_joins_with_spaces() -> None:
    assert mention_logins(["a", "b", "c"]) == "@a @b @c"
