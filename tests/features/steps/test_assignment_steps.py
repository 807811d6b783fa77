"""Behavioural coverage for assignment and pricing deliveries."""

from __future__ import annotations

import typing as typ

import pytest
from pytest_bdd import given, parsers, scenario, then, when

from bountybot.handlers import build_executor
from bountybot.pipeline import Event, PipelineState
from tests.fixtures.events import issue_payload
from tests.helpers import run_async

if typ.TYPE_CHECKING:
    from bountybot.pipeline import BotServices, InvocationReport
    from tests.fixtures.tracker import FakeTracker

ISSUE_NUMBER = 42


class AssignmentContext(typ.TypedDict, total=False):
    """Shared mutable scenario state."""

    labels: list[str]
    assignees: list[str]
    report: InvocationReport


@scenario(
    "../assignment.feature",
    "The lightest time label sets the deadline",
)
def test_lightest_time_label_sets_deadline() -> None:
    """Wrap the pytest-bdd scenario for deadline selection."""


@scenario(
    "../assignment.feature",
    "An assignment without assignees posts nothing",
)
def test_assignment_without_assignees() -> None:
    """Wrap the pytest-bdd scenario for an empty assignee list."""


@scenario(
    "../assignment.feature",
    "Pricing labels are added once both tiers are present",
)
def test_pricing_labels_added() -> None:
    """Wrap the pytest-bdd scenario for price labelling."""


@pytest.fixture
def assignment_context() -> AssignmentContext:
    """Start each scenario with an unlabelled, unassigned issue."""
    return {"labels": [], "assignees": []}


@given(parsers.parse('an issue labelled "{labels}"'))
def given_issue_labelled(assignment_context: AssignmentContext, labels: str) -> None:
    """Record the issue's labels from a comma-separated list."""
    assignment_context["labels"] = [name.strip() for name in labels.split(",")]


@given(parsers.parse('the issue is assigned to "{login}"'))
def given_issue_assigned(assignment_context: AssignmentContext, login: str) -> None:
    """Add an assignee to the issue."""
    assignment_context["assignees"].append(login)


@when(parsers.parse('the "{event_name}" delivery with action "{action}" is handled'))
def when_delivery_handled(
    assignment_context: AssignmentContext,
    services: BotServices,
    event_name: str,
    action: str,
) -> None:
    """Run the delivery through the default executor."""
    body = {
        "action": action,
        "issue": issue_payload(
            ISSUE_NUMBER,
            labels=assignment_context["labels"],
            assignees=assignment_context["assignees"],
        ),
        "sender": {"login": "maintainer"},
    }
    event = Event.from_webhook(event_name, body)
    executor = build_executor(services)

    async def _run() -> InvocationReport:
        return await executor.run(event)

    assignment_context["report"] = run_async(_run)


@then(parsers.parse('the comment "{body}" is posted'))
def then_comment_posted(tracker: FakeTracker, body: str) -> None:
    """Assert exactly one comment with ``body`` was posted."""
    assert tracker.comments == [(ISSUE_NUMBER, body)], (
        f"expected comment {body!r}, got {tracker.comments}"
    )


@then("no comment is posted")
def then_no_comment(tracker: FakeTracker) -> None:
    """Assert the tracker received no comments."""
    assert tracker.comments == [], f"unexpected comments: {tracker.comments}"


@then(parsers.parse('the label "{label}" is added'))
def then_label_added(tracker: FakeTracker, label: str) -> None:
    """Assert ``label`` was added to the issue."""
    assert tracker.added_labels == [(ISSUE_NUMBER, [label])], (
        f"expected label {label!r}, got {tracker.added_labels}"
    )


@then("the invocation reaches the done state")
def then_invocation_done(assignment_context: AssignmentContext) -> None:
    """Assert the invocation completed without handler failures."""
    report = assignment_context["report"]
    assert report.states[-1] is PipelineState.DONE
    assert report.states.count(PipelineState.WILDCARD) == 1
    assert report.failures == [], f"unexpected failures: {report.failures}"
