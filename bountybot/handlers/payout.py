"""Payout notices posted when a priced issue is closed."""

from __future__ import annotations

import typing as typ

from bountybot.logging import get_logger, log_debug, log_info
from bountybot.pipeline.models import HandlerResult
from bountybot.pricing import derive_pricing
from bountybot.pricing.price import PRICE_LABEL_PREFIX

from .comment import WALLET_COMMAND
from .shared import assignee_logins

if typ.TYPE_CHECKING:
    from bountybot.pipeline.models import BotContext

logger = get_logger(__name__)


def payout_notice(login: str, price: str, wallet: str | None) -> str:
    """Compose the payout comment for one assignee."""
    reward = price.removeprefix(PRICE_LABEL_PREFIX)
    if wallet is None:
        return (
            f"@{login} this task is worth {reward}. Register a wallet with "
            f"`{WALLET_COMMAND} <address>` to receive the payout."
        )
    return f"@{login} {reward} will be paid out to `{wallet}`."


async def handle_issue_closed(context: BotContext) -> HandlerResult:
    """Tell each assignee of a priced issue where their reward goes.

    An assignee whose wallet cannot be read gets no notice, and the handler
    reports the failure once every other notice is posted.
    """
    issue = context.payload.issue
    if issue is None:
        return HandlerResult.skipped("no issue")

    price = derive_pricing(issue.labels, context.config.price).price
    if price is None:
        log_debug(logger, "Closed issue #%s has no price", issue.number)
        return HandlerResult.skipped("no price")

    logins = assignee_logins(issue, context.config.assign.exclude_accounts)
    if not logins:
        log_debug(logger, "Closed issue #%s has no assignees", issue.number)
        return HandlerResult.skipped("no assignees")

    unread: list[str] = []
    for login in logins:
        lookup = await context.gateway.lookup_wallet_address(login)
        if not lookup.ok:
            unread.append(login)
            continue
        log_info(
            logger,
            "Posting payout notice for %s on #%s (wallet registered: %s)",
            login,
            issue.number,
            lookup.address is not None,
        )
        await context.tracker.post_comment(
            issue.number, payout_notice(login, price, lookup.address)
        )

    if unread:
        return HandlerResult.failed(f"wallet lookup failed for {', '.join(unread)}")
    return HandlerResult.done(price)
