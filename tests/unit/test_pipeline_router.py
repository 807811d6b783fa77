"""Tests for event routing."""

from __future__ import annotations

import pytest

from bountybot.handlers import (
    apply_pricing_labels,
    build_default_routes,
    comment_with_assign_message,
    handle_comment,
    handle_issue_closed,
    null_handler,
    validate_price_labels,
)
from bountybot.pipeline import EventKind, EventRouter, PipelineDefinition, event_kind


def test_resolve_returns_the_routed_pipeline() -> None:
    pipeline = PipelineDefinition(action=(null_handler,))
    router = EventRouter({"issues.assigned": pipeline})

    assert router.resolve("issues.assigned") is pipeline


def test_unrouted_kind_resolves_to_none() -> None:
    router = EventRouter({})
    assert router.resolve("issues.transferred") is None


def test_routes_are_copied_at_construction() -> None:
    routes = {"issues.assigned": PipelineDefinition()}
    router = EventRouter(routes)
    routes["issues.closed"] = PipelineDefinition()

    assert router.kinds == frozenset({"issues.assigned"})


@pytest.mark.parametrize(
    ("event_name", "action", "kind"),
    [
        ("issues", "labeled", "issues.labeled"),
        ("issue_comment", "edited", "issue_comment.edited"),
        ("ping", None, "ping"),
    ],
)
def test_event_kind(event_name: str, action: str | None, kind: str) -> None:
    assert event_kind(event_name, action) == kind


def test_default_routing_table() -> None:
    router = EventRouter(build_default_routes())

    for kind in (EventKind.ISSUES_LABELED, EventKind.ISSUES_UNLABELED):
        pipeline = router.resolve(kind)
        assert pipeline is not None
        assert pipeline.pre == (validate_price_labels,)
        assert pipeline.action == (apply_pricing_labels,)
        assert pipeline.post == (null_handler,)

    assigned = router.resolve(EventKind.ISSUES_ASSIGNED)
    assert assigned is not None
    assert assigned.action == (comment_with_assign_message,)

    for kind in (EventKind.ISSUE_COMMENT_CREATED, EventKind.ISSUE_COMMENT_EDITED):
        pipeline = router.resolve(kind)
        assert pipeline is not None
        assert pipeline.action == (handle_comment,)

    closed = router.resolve(EventKind.ISSUES_CLOSED)
    assert closed is not None
    assert closed.action == (handle_issue_closed,)

    assert router.resolve(EventKind.ISSUES_OPENED) is None
