"""Event handlers and the default routing table."""

from __future__ import annotations

from .assign import comment_with_assign_message
from .comment import WalletCommand, handle_comment, parse_wallet_command
from .payout import handle_issue_closed, payout_notice
from .pricing import apply_pricing_labels, validate_price_labels
from .processors import DEFAULT_WILDCARD, build_default_routes, build_executor
from .shared import assignee_logins, null_handler
from .wildcard import check_weekly_update, collect_analytics

__all__ = [
    "DEFAULT_WILDCARD",
    "WalletCommand",
    "apply_pricing_labels",
    "assignee_logins",
    "build_default_routes",
    "build_executor",
    "check_weekly_update",
    "collect_analytics",
    "comment_with_assign_message",
    "handle_comment",
    "handle_issue_closed",
    "null_handler",
    "parse_wallet_command",
    "payout_notice",
    "validate_price_labels",
]
