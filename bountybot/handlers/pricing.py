"""Price label maintenance on label changes."""

from __future__ import annotations

import typing as typ

from bountybot.github.models import label_names
from bountybot.logging import get_logger, log_debug, log_info
from bountybot.pipeline.models import HandlerResult
from bountybot.pricing import (
    derive_pricing,
    parse_price_label,
    select_priority_label,
    select_time_label,
)

if typ.TYPE_CHECKING:
    from bountybot.pipeline.models import BotContext

logger = get_logger(__name__)


async def validate_price_labels(context: BotContext) -> HandlerResult:
    """Report issues that lack a time or a priority label.

    Advisory only: the result never stops the action stage.
    """
    issue = context.payload.issue
    if issue is None:
        return HandlerResult.skipped("no issue")

    price = context.config.price
    missing: list[str] = []
    if select_time_label(issue.labels, price.time_labels) is None:
        missing.append("time")
    if select_priority_label(issue.labels, price.priority_labels) is None:
        missing.append("priority")
    if missing:
        detail = f"missing {' and '.join(missing)} label"
        log_debug(logger, "Issue #%s is %s", issue.number, detail)
        return HandlerResult.skipped(detail)
    return HandlerResult.done()


async def apply_pricing_labels(context: BotContext) -> HandlerResult:
    """Keep exactly one price label, matching the issue's current tiers."""
    issue = context.payload.issue
    if issue is None:
        return HandlerResult.skipped("no issue")

    pricing = derive_pricing(issue.labels, context.config.price)
    current = label_names(issue.labels)
    stale = [
        name
        for name in current
        if parse_price_label(name) is not None and name != pricing.price
    ]
    for name in stale:
        log_info(logger, "Removing stale price label %r from #%s", name, issue.number)
        await context.tracker.remove_label(issue.number, name)

    if pricing.price is None:
        log_debug(logger, "Issue #%s lacks a tier; no price applies", issue.number)
        return HandlerResult.skipped("no price")

    if pricing.price in current:
        return HandlerResult.done(pricing.price)

    log_info(logger, "Adding price label %r to #%s", pricing.price, issue.number)
    await context.tracker.add_labels(issue.number, [pricing.price])
    return HandlerResult.done(pricing.price)
