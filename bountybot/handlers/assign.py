"""Deadline comment posted when an issue is assigned."""

from __future__ import annotations

import typing as typ

from bountybot.logging import get_logger, log_debug, log_info
from bountybot.pipeline.models import HandlerResult
from bountybot.pricing import compute_deadline, select_time_label

from .shared import assignee_logins

if typ.TYPE_CHECKING:
    from bountybot.pipeline.models import BotContext

logger = get_logger(__name__)


async def comment_with_assign_message(context: BotContext) -> HandlerResult:
    """Mention the assignees with the deadline implied by the time label.

    Every missing prerequisite (issue, assignees, labels, a configured time
    label, a duration on that label) ends the handler with a debug log and a
    skipped result; no partial comment is posted.
    """
    issue = context.payload.issue
    if issue is None:
        log_debug(logger, "No issue in %s payload", context.event.kind)
        return HandlerResult.skipped("no issue")

    log_info(logger, "Commenting timeline message for issue #%s", issue.number)
    logins = assignee_logins(issue, context.config.assign.exclude_accounts)
    if not logins:
        log_debug(logger, "No assignees to mention on issue #%s", issue.number)
        return HandlerResult.skipped("no assignees")

    if not issue.labels:
        log_debug(logger, "No labels to calculate timeline on #%s", issue.number)
        return HandlerResult.skipped("no labels")

    label = select_time_label(issue.labels, context.config.price.time_labels)
    if label is None:
        log_debug(logger, "No configured time label on issue #%s", issue.number)
        return HandlerResult.skipped("no time label")

    deadline = compute_deadline(label, logins, context.now())
    if deadline is None:
        log_debug(logger, "Missing duration for time label %s", label.name)
        return HandlerResult.skipped(f"no duration for {label.name}")

    log_debug(
        logger,
        "Creating issue comment on #%s: %s",
        issue.number,
        deadline.mention_text,
    )
    await context.tracker.post_comment(issue.number, deadline.mention_text)
    return HandlerResult.done(deadline.mention_text)
