"""Events, handler contracts and pipeline definitions."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import typing as typ

from bountybot.common.time import utcnow
from bountybot.github.models import decode_payload

if typ.TYPE_CHECKING:
    import datetime as dt

    from bountybot.config.models import BotConfig
    from bountybot.github.client import TrackerClient
    from bountybot.github.models import WebhookPayload
    from bountybot.storage.gateway import PersistenceGateway


class EventKind(enum.StrEnum):
    """Event kinds the default routes know about (``<event>.<action>``)."""

    ISSUES_OPENED = "issues.opened"
    ISSUES_LABELED = "issues.labeled"
    ISSUES_UNLABELED = "issues.unlabeled"
    ISSUES_ASSIGNED = "issues.assigned"
    ISSUES_UNASSIGNED = "issues.unassigned"
    ISSUES_CLOSED = "issues.closed"
    ISSUE_COMMENT_CREATED = "issue_comment.created"
    ISSUE_COMMENT_EDITED = "issue_comment.edited"


def event_kind(event_name: str, action: str | None) -> str:
    """Combine a webhook event name and action into a kind string."""
    return f"{event_name}.{action}" if action else event_name


@dc.dataclass(frozen=True, slots=True)
class Event:
    """One inbound webhook delivery.

    ``kind`` is a plain string so kinds without a route remain valid events.
    """

    kind: str
    payload: WebhookPayload

    @classmethod
    def from_webhook(cls, event_name: str, body: object) -> Event:
        """Decode a webhook body delivered under ``event_name``.

        Raises
        ------
        msgspec.ValidationError
            If the body does not match the expected payload shape.

        """
        payload = decode_payload(body)
        return cls(kind=event_kind(event_name, payload.action), payload=payload)


class HandlerStatus(enum.StrEnum):
    """How a handler finished."""

    DONE = "done"
    SKIPPED = "skipped"
    FAILED = "failed"


@dc.dataclass(frozen=True, slots=True)
class HandlerResult:
    """Result a handler reports back to the executor."""

    status: HandlerStatus = HandlerStatus.DONE
    detail: str = ""

    @classmethod
    def done(cls, detail: str = "") -> HandlerResult:
        """Handler did its work."""
        return cls(HandlerStatus.DONE, detail)

    @classmethod
    def skipped(cls, detail: str) -> HandlerResult:
        """A prerequisite was missing; nothing was done."""
        return cls(HandlerStatus.SKIPPED, detail)

    @classmethod
    def failed(cls, detail: str) -> HandlerResult:
        """Handler attempted its work and failed."""
        return cls(HandlerStatus.FAILED, detail)


@dc.dataclass(frozen=True, slots=True)
class BotServices:
    """Collaborators shared by every invocation."""

    config: BotConfig
    gateway: PersistenceGateway
    tracker: TrackerClient
    clock: cabc.Callable[[], dt.datetime] = utcnow


@dc.dataclass(frozen=True, slots=True)
class BotContext:
    """Everything a handler may use, passed explicitly on each call."""

    event: Event
    services: BotServices

    @property
    def payload(self) -> WebhookPayload:
        return self.event.payload

    @property
    def config(self) -> BotConfig:
        return self.services.config

    @property
    def gateway(self) -> PersistenceGateway:
        return self.services.gateway

    @property
    def tracker(self) -> TrackerClient:
        return self.services.tracker

    def now(self) -> dt.datetime:
        """Return the current instant from the injected clock."""
        return self.services.clock()


Handler: typ.TypeAlias = "cabc.Callable[[BotContext], cabc.Awaitable[HandlerResult | None]]"


@dc.dataclass(frozen=True, slots=True)
class PipelineDefinition:
    """Ordered handler lists for one event kind."""

    pre: tuple[Handler, ...] = ()
    action: tuple[Handler, ...] = ()
    post: tuple[Handler, ...] = ()


def handler_name(handler: Handler) -> str:
    """Return a readable name for a handler callable."""
    return getattr(handler, "__qualname__", None) or repr(handler)
