"""Default routing table wiring event kinds to handlers."""

from __future__ import annotations

import typing as typ

from bountybot.pipeline.executor import PipelineExecutor
from bountybot.pipeline.models import EventKind, PipelineDefinition
from bountybot.pipeline.router import EventRouter

from .assign import comment_with_assign_message
from .comment import handle_comment
from .payout import handle_issue_closed
from .pricing import apply_pricing_labels, validate_price_labels
from .shared import null_handler
from .wildcard import check_weekly_update, collect_analytics

if typ.TYPE_CHECKING:
    from bountybot.pipeline.models import BotServices, Handler

DEFAULT_WILDCARD: tuple[Handler, ...] = (collect_analytics, check_weekly_update)


def build_default_routes() -> dict[str, PipelineDefinition]:
    """Return a fresh copy of the default routing table."""
    pricing = PipelineDefinition(
        pre=(validate_price_labels,),
        action=(apply_pricing_labels,),
        post=(null_handler,),
    )
    comments = PipelineDefinition(action=(handle_comment,))
    return {
        EventKind.ISSUES_LABELED: pricing,
        EventKind.ISSUES_UNLABELED: pricing,
        EventKind.ISSUES_ASSIGNED: PipelineDefinition(
            action=(comment_with_assign_message,)
        ),
        EventKind.ISSUE_COMMENT_CREATED: comments,
        EventKind.ISSUE_COMMENT_EDITED: comments,
        EventKind.ISSUES_CLOSED: PipelineDefinition(action=(handle_issue_closed,)),
    }


def build_executor(services: BotServices) -> PipelineExecutor:
    """Assemble an executor over the default routes and wildcard handlers."""
    router = EventRouter(build_default_routes())
    return PipelineExecutor(router, DEFAULT_WILDCARD, services)
