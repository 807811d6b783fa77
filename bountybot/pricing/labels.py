"""Selection of the governing label among weighted label tiers.

An issue may carry several labels from the same tier family (two time
labels, say). The governing one is the matched label with the lowest
weight, which by configuration convention is the most urgent.
"""

from __future__ import annotations

import typing as typ

from bountybot.github.models import UNKNOWN_LABEL, label_names

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class WeightedLabel(typ.Protocol):
    """Any configured label tier with a name and an ordering weight."""

    @property
    def name(self) -> str: ...

    @property
    def weight(self) -> int: ...


LabelT = typ.TypeVar("LabelT", bound=WeightedLabel)


def matched_labels(
    issue_labels: cabc.Iterable[object],
    configured_labels: cabc.Sequence[LabelT],
) -> list[LabelT]:
    """Return configured labels present on the issue, in configuration order.

    Issue labels may be bare strings or ``{"name": ...}`` objects; shapes
    that are neither normalise to ``"unknown"`` and never match.
    """
    present = set(label_names(issue_labels)) - {UNKNOWN_LABEL}
    return [label for label in configured_labels if label.name in present]


def select_label(
    issue_labels: cabc.Iterable[object],
    configured_labels: cabc.Sequence[LabelT],
) -> LabelT | None:
    """Return the matched label with the minimum weight, or ``None``.

    The sort is stable, so equal weights resolve to the label configured
    first. The result does not depend on the order of ``issue_labels``.

    Examples
    --------
    >>> from bountybot.config import TimeLabel
    >>> day = TimeLabel(name="Time: 1 Day", weight=1, value=86400)
    >>> week = TimeLabel(name="Time: 1 Week", weight=2, value=604800)
    >>> select_label(["Time: 1 Week", {"name": "Time: 1 Day"}], [day, week]).name
    'Time: 1 Day'

    """
    matched = matched_labels(issue_labels, configured_labels)
    if not matched:
        return None
    return sorted(matched, key=lambda label: label.weight)[0]


select_time_label = select_label
select_priority_label = select_label
