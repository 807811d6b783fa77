"""Deadline computation for newly assigned issues."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ

from bountybot.common.time import format_us_date

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bountybot.config.models import TimeLabel

DEADLINE_PREFIX = "Deadline:"


@dc.dataclass(frozen=True, slots=True)
class Deadline:
    """Absolute deadline plus the comment text announcing it."""

    deadline: dt.datetime
    mention_text: str


def mention_logins(logins: cabc.Iterable[str]) -> str:
    """Render ``@login`` mentions separated by single spaces."""
    return " ".join(f"@{login}" for login in logins)


def compute_deadline(
    label: TimeLabel,
    assignee_logins: cabc.Sequence[str],
    now: dt.datetime,
) -> Deadline | None:
    """Compute the deadline implied by ``label`` starting at ``now``.

    Returns ``None`` only when the label has no configured duration.

    Parameters
    ----------
    label
        Governing time label; ``label.value`` is a duration in seconds.
    assignee_logins
        Logins to mention, already filtered for excluded accounts. Callers
        decide whether a deadline without mentions is worth posting.
    now
        Timezone-aware start instant.

    """
    if label.value is None:
        return None
    if now.tzinfo is None:
        msg = "now must be timezone aware"
        raise ValueError(msg)

    deadline = now + dt.timedelta(seconds=label.value)
    mentions = mention_logins(assignee_logins)
    notice = f"{DEADLINE_PREFIX} {format_us_date(deadline)}"
    mention_text = f"{mentions} {notice}" if mentions else notice
    return Deadline(deadline=deadline, mention_text=mention_text)
