"""Handlers run after every event, routed or not."""

from __future__ import annotations

import datetime as dt
import typing as typ

import msgspec

from bountybot.common.time import to_epoch_seconds
from bountybot.logging import get_logger, log_debug, log_info
from bountybot.pipeline.models import EventKind, HandlerResult
from bountybot.pricing import derive_pricing
from bountybot.storage.rows import IssueAdditions

from .shared import assignee_logins

if typ.TYPE_CHECKING:
    from bountybot.github.models import Issue
    from bountybot.pipeline.models import BotContext

logger = get_logger(__name__)


def _issue_additions(context: BotContext, issue: Issue) -> IssueAdditions:
    pricing = derive_pricing(issue.labels, context.config.price)
    kind = context.event.kind
    now = context.now()
    return IssueAdditions.from_pricing(
        pricing,
        started_at=now if kind == EventKind.ISSUES_ASSIGNED else msgspec.UNSET,
        completed_at=now if kind == EventKind.ISSUES_CLOSED else msgspec.UNSET,
    )


async def collect_analytics(context: BotContext) -> HandlerResult:
    """Record the event's issue and its assignees' profiles.

    Store failures are collected rather than raised so every record gets
    its chance to be written; tracker errors propagate to the executor.
    """
    issue = context.payload.issue
    if issue is None:
        log_debug(logger, "No issue to record for %s", context.event.kind)
        return HandlerResult.skipped("no issue")

    failures: list[str] = []
    result = await context.gateway.upsert_issue(issue, _issue_additions(context, issue))
    if not result.ok:
        failures.append(f"issue #{issue.number}: {result.message}")

    for login in assignee_logins(issue):
        profile = await context.tracker.get_user_profile(login)
        result = await context.gateway.upsert_user(profile)
        if not result.ok:
            failures.append(f"user {login}: {result.message}")

    if failures:
        return HandlerResult.failed("; ".join(failures))
    return HandlerResult.done()


async def check_weekly_update(context: BotContext) -> HandlerResult:
    """Advance the weekly marker once ``weekly_interval_days`` have passed."""
    now = to_epoch_seconds(context.now())
    interval = dt.timedelta(days=context.config.weekly_interval_days)
    last = await context.gateway.get_last_weekly_time()
    if last and now - last < interval.total_seconds():
        return HandlerResult.skipped("weekly update not due")

    result = await context.gateway.update_last_weekly_time(now)
    if not result.ok:
        return HandlerResult.failed(f"weekly marker not saved: {result.message}")
    log_info(logger, "Weekly update due; marker advanced to %s", now)
    return HandlerResult.done()
