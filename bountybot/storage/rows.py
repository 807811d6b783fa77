"""Typed rows derived from tracker entities before they are persisted.

Each table has its own row struct so every write is checked against the
table's real shape. Optional additions use ``msgspec.UNSET`` for "absent":
an absent field is left untouched by an update, whereas ``None`` is written
as NULL.
"""

from __future__ import annotations

import datetime as dt  # noqa: TC003
import typing as typ

import msgspec

from bountybot.common.time import parse_github_datetime
from bountybot.github.models import label_names

if typ.TYPE_CHECKING:
    from bountybot.github.models import Issue, UserProfile
    from bountybot.pricing.price import PricingLabels


class _Row(msgspec.Struct, kw_only=True, frozen=True):
    """Base row; :meth:`values` drops unset fields."""

    def values(self) -> dict[str, typ.Any]:
        """Return column values for the fields that are set."""
        return {
            name: getattr(self, name)
            for name in self.__struct_fields__
            if getattr(self, name) is not msgspec.UNSET
        }


class IssueAdditions(msgspec.Struct, kw_only=True, frozen=True):
    """Values derived by the bot rather than read from the issue itself."""

    timeline: str | None = None
    priority: str | None = None
    price: str | None = None
    started_at: dt.datetime | None | msgspec.UnsetType = msgspec.UNSET
    completed_at: dt.datetime | None | msgspec.UnsetType = msgspec.UNSET

    @classmethod
    def from_pricing(
        cls,
        pricing: PricingLabels,
        *,
        started_at: dt.datetime | None | msgspec.UnsetType = msgspec.UNSET,
        completed_at: dt.datetime | None | msgspec.UnsetType = msgspec.UNSET,
    ) -> IssueAdditions:
        """Build additions from a derived pricing triple."""
        return cls(
            timeline=pricing.timeline,
            priority=pricing.priority,
            price=pricing.price,
            started_at=started_at,
            completed_at=completed_at,
        )


class IssueRow(_Row, kw_only=True, frozen=True):
    """Row written to the ``issues`` table."""

    issue_number: int
    issue_url: str
    comments_url: str
    events_url: str
    labels: list[str]
    assignees: list[str]
    timeline: str | None
    priority: str | None
    price: str | None
    started_at: dt.datetime | None | msgspec.UnsetType = msgspec.UNSET
    completed_at: dt.datetime | None | msgspec.UnsetType = msgspec.UNSET
    closed_at: dt.datetime | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class UserAdditions(msgspec.Struct, kw_only=True, frozen=True):
    """Values attached to a user row that the tracker does not provide."""

    wallet_address: str | None | msgspec.UnsetType = msgspec.UNSET


class UserRow(_Row, kw_only=True, frozen=True):
    """Row written to the ``users`` table."""

    user_login: str
    user_type: str | None = None
    user_name: str | None = None
    company: str | None = None
    blog: str | None = None
    user_location: str | None = None
    email: str | None = None
    bio: str | None = None
    twitter_username: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    wallet_address: str | None | msgspec.UnsetType = msgspec.UNSET
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


def issue_row(issue: Issue, additions: IssueAdditions) -> IssueRow:
    """Derive the ``issues`` row for a tracker issue."""
    return IssueRow(
        issue_number=issue.number,
        issue_url=issue.html_url,
        comments_url=issue.comments_url,
        events_url=issue.events_url,
        labels=label_names(issue.labels),
        assignees=[assignee.login for assignee in issue.assignees],
        timeline=additions.timeline,
        priority=additions.priority,
        price=additions.price,
        started_at=additions.started_at,
        completed_at=additions.completed_at,
        closed_at=parse_github_datetime(issue.closed_at),
        created_at=parse_github_datetime(issue.created_at),
        updated_at=parse_github_datetime(issue.updated_at),
    )


def user_row(profile: UserProfile, additions: UserAdditions | None = None) -> UserRow:
    """Derive the ``users`` row for a tracker user profile."""
    extra = additions or UserAdditions()
    return UserRow(
        user_login=profile.login,
        user_type=profile.type,
        user_name=profile.name,
        company=profile.company,
        blog=profile.blog,
        user_location=profile.location,
        email=profile.email,
        bio=profile.bio,
        twitter_username=profile.twitter_username,
        public_repos=profile.public_repos,
        followers=profile.followers,
        following=profile.following,
        wallet_address=extra.wallet_address,
        created_at=parse_github_datetime(profile.created_at),
        updated_at=parse_github_datetime(profile.updated_at),
    )
