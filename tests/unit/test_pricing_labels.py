"""Tests for weighted label selection."""

from __future__ import annotations

import itertools

import pytest

from bountybot.config.models import PriorityLabel, TimeLabel
from bountybot.pricing import matched_labels, select_priority_label, select_time_label
from tests.fixtures.events import DAY, HIGH, NORMAL, UNSCHEDULED, WEEK

CONFIGURED = [DAY, WEEK, UNSCHEDULED]


def test_day_label_outranks_week_label() -> None:
    """An issue with a day and a week label is governed by the day label."""
    selected = select_time_label(["Time: 1 Day", "Time: 1 Week"], CONFIGURED)
    assert selected == DAY


def test_label_objects_and_strings_both_match() -> None:
    labels = [{"name": "Time: 1 Week", "color": "ededed"}, "Time: 1 Day"]
    assert select_time_label(labels, CONFIGURED) == DAY


@pytest.mark.parametrize(
    "labels",
    [
        [],
        ["bug", "help wanted"],
        [42, None, {"colour": "red"}],
    ],
)
def test_no_intersection_selects_nothing(labels: list[object]) -> None:
    assert select_time_label(labels, CONFIGURED) is None


def test_unrecognised_shapes_never_match_a_label_named_unknown() -> None:
    configured = [TimeLabel(name="unknown", weight=0, value=60)]
    assert select_time_label([42, {"colour": "red"}], configured) is None


def test_selection_ignores_issue_label_order() -> None:
    """Every permutation of the issue's labels selects the same label."""
    tied = TimeLabel(name="Time: Also 1 Day", weight=1, value=86400)
    configured = [DAY, WEEK, tied]
    labels = ["Time: 1 Week", "Time: Also 1 Day", "bug", "Time: 1 Day"]

    selections = {
        select_time_label(list(order), configured)
        for order in itertools.permutations(labels)
    }

    assert selections == {DAY}


def test_equal_weights_resolve_to_configuration_order() -> None:
    first = PriorityLabel(name="Priority: A", weight=1)
    second = PriorityLabel(name="Priority: B", weight=1)

    labels = ["Priority: B", "Priority: A"]

    assert select_priority_label(labels, [first, second]) == first
    assert select_priority_label(labels, [second, first]) == second


def test_matched_labels_keep_configuration_order() -> None:
    matched = matched_labels(["Priority: Normal", "Priority: High"], [HIGH, NORMAL])
    assert matched == [HIGH, NORMAL]


def test_selection_picks_unactionable_label_when_lightest() -> None:
    """Selection is purely by weight; a missing duration is handled later."""
    unscheduled_first = TimeLabel(name="Time: Unscheduled", weight=0)
    selected = select_time_label(
        ["Time: Unscheduled", "Time: 1 Day"], [DAY, unscheduled_first]
    )
    assert selected == unscheduled_first
