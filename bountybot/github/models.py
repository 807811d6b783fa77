"""Typed webhook payload and user profile models.

Only the fields the handlers read are declared; msgspec ignores the rest of
GitHub's (large) payloads.
"""

from __future__ import annotations

import typing as typ

import msgspec

UNKNOWN_LABEL = "unknown"


class GitHubUser(msgspec.Struct, frozen=True):
    """Minimal user reference embedded in payloads (assignee, sender)."""

    login: str


class Issue(msgspec.Struct, frozen=True):
    """Issue entity carried by ``issues`` and ``issue_comment`` events.

    ``labels`` is left untyped because label identity arrives either as a
    bare string or as a ``{"name": ...}`` object; see :func:`label_name`.
    """

    number: int
    html_url: str = ""
    comments_url: str = ""
    events_url: str = ""
    title: str = ""
    state: str = "open"
    labels: list[typ.Any] = msgspec.field(default_factory=list)
    assignees: list[GitHubUser] = msgspec.field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None
    closed_at: str | None = None


class Comment(msgspec.Struct, frozen=True):
    """Issue comment carried by ``issue_comment`` events."""

    id: int
    body: str = ""
    user: GitHubUser | None = None


class WebhookPayload(msgspec.Struct, frozen=True):
    """Webhook body for the events the bot reacts to."""

    action: str | None = None
    issue: Issue | None = None
    comment: Comment | None = None
    sender: GitHubUser | None = None


class UserProfile(msgspec.Struct, frozen=True):
    """Public profile returned by ``GET /users/{login}``."""

    login: str
    type: str = "User"
    name: str | None = None
    company: str | None = None
    blog: str | None = None
    location: str | None = None
    email: str | None = None
    bio: str | None = None
    twitter_username: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    created_at: str | None = None
    updated_at: str | None = None


def label_name(label: object) -> str:
    """Normalise a payload label into its name.

    Bare strings are names already, ``{"name": ...}`` objects yield their
    name and any other shape yields :data:`UNKNOWN_LABEL`.

    Examples
    --------
    >>> label_name("Time: <1 Day")
    'Time: <1 Day'
    >>> label_name({"name": "Priority: High"})
    'Priority: High'
    >>> label_name(42)
    'unknown'

    """
    if isinstance(label, str):
        return label
    if isinstance(label, dict):
        name = label.get("name")
        return name if isinstance(name, str) else UNKNOWN_LABEL
    name = getattr(label, "name", None)
    return name if isinstance(name, str) else UNKNOWN_LABEL


def label_names(labels: typ.Iterable[object]) -> list[str]:
    """Normalise every label in order."""
    return [label_name(label) for label in labels]


def decode_payload(raw: object) -> WebhookPayload:
    """Convert a decoded JSON body into a :class:`WebhookPayload`.

    Raises
    ------
    msgspec.ValidationError
        If the body does not match the expected shape.

    """
    return msgspec.convert(raw, type=WebhookPayload)
