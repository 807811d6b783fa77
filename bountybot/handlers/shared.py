"""Helpers shared by the bot's handlers."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bountybot.github.models import Issue
    from bountybot.pipeline.models import BotContext, HandlerResult


async def null_handler(context: BotContext) -> HandlerResult | None:
    """Do nothing; placeholder for empty pipeline slots."""
    del context
    return None


def assignee_logins(issue: Issue, exclude: cabc.Iterable[str] = ()) -> list[str]:
    """Return assignee logins in payload order, minus ``exclude``.

    Duplicate assignees are reported once.
    """
    excluded = set(exclude)
    logins: list[str] = []
    for assignee in issue.assignees:
        if assignee.login in excluded or assignee.login in logins:
            continue
        logins.append(assignee.login)
    return logins
