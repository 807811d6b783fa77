"""Slash commands issued through issue comments."""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from bountybot.logging import get_logger, log_debug, log_info
from bountybot.pipeline.models import HandlerResult

if typ.TYPE_CHECKING:
    from bountybot.pipeline.models import BotContext

logger = get_logger(__name__)

WALLET_COMMAND = "/wallet"
WALLET_ADDRESS_PATTERN = re.compile(r"0x[0-9a-fA-F]{40}")


@dc.dataclass(frozen=True, slots=True)
class WalletCommand:
    """A parsed ``/wallet`` command; ``address`` is the raw argument."""

    address: str

    @property
    def valid(self) -> bool:
        return WALLET_ADDRESS_PATTERN.fullmatch(self.address) is not None


def parse_wallet_command(body: str) -> WalletCommand | None:
    """Parse ``/wallet <address>`` from the start of a comment body.

    Returns ``None`` when the comment is not a wallet command. A command
    without an argument parses with an empty address.

    Examples
    --------
    >>> parse_wallet_command("/wallet 0xabc").address
    '0xabc'
    >>> parse_wallet_command("thanks!") is None
    True

    """
    tokens = body.split()
    if not tokens or tokens[0].lower() != WALLET_COMMAND:
        return None
    return WalletCommand(address=tokens[1] if len(tokens) > 1 else "")


def _wallet_help(login: str) -> str:
    return (
        f"@{login} please provide a valid wallet address, "
        f"e.g. `{WALLET_COMMAND} 0x{'0' * 40}`."
    )


async def handle_comment(context: BotContext) -> HandlerResult:
    """Run the command in a created or edited comment, if any."""
    payload = context.payload
    issue, comment = payload.issue, payload.comment
    if issue is None or comment is None:
        log_debug(logger, "No issue comment in %s payload", context.event.kind)
        return HandlerResult.skipped("no comment")

    command = parse_wallet_command(comment.body)
    if command is None:
        return HandlerResult.skipped("not a command")

    author = comment.user or payload.sender
    if author is None:
        log_debug(logger, "Wallet command on #%s has no author", issue.number)
        return HandlerResult.skipped("no comment author")

    if not command.valid:
        log_info(logger, "Rejected wallet address from %s", author.login)
        await context.tracker.post_comment(issue.number, _wallet_help(author.login))
        return HandlerResult.done("invalid wallet address")

    result = await context.gateway.upsert_wallet_address(author.login, command.address)
    if not result.ok:
        return HandlerResult.failed(f"wallet not saved: {result.message}")

    await context.tracker.post_comment(
        issue.number,
        f"@{author.login} updated your wallet address to `{command.address}`.",
    )
    return HandlerResult.done(f"wallet {result.outcome}")
