"""Typed bot configuration structures."""

from __future__ import annotations

import msgspec


class TimeLabel(msgspec.Struct, kw_only=True, frozen=True):
    """Label encoding an urgency tier and how long the work may take.

    Attributes
    ----------
    name : str
        Label name exactly as it appears on the tracker, e.g. ``"Time: <1 Day"``.
    weight : int
        Ordering key among time labels; lower weights are selected first and
        also scale the computed price.
    value : int, optional
        Duration in seconds. ``None`` marks the label as not actionable for
        deadline computation.

    """

    name: str
    weight: int
    value: int | None = None


class PriorityLabel(msgspec.Struct, kw_only=True, frozen=True):
    """Label encoding a priority tier.

    Attributes
    ----------
    name : str
        Label name, e.g. ``"Priority: High"``.
    weight : int
        Ordering key; lower weights are selected first.

    """

    name: str
    weight: int


class PriceConfig(msgspec.Struct, kw_only=True, frozen=True):
    """Pricing inputs: base multiplier plus the label tiers."""

    base_multiplier: float = 1000.0
    time_labels: list[TimeLabel] = msgspec.field(default_factory=list)
    priority_labels: list[PriorityLabel] = msgspec.field(default_factory=list)


class AssignConfig(msgspec.Struct, kw_only=True, frozen=True):
    """Assignment behaviour.

    Attributes
    ----------
    exclude_accounts : list[str]
        Logins never mentioned in deadline or payout comments (bots,
        maintainers).

    """

    exclude_accounts: list[str] = msgspec.field(default_factory=list)


class BotConfig(msgspec.Struct, kw_only=True, frozen=True):
    """Root configuration document."""

    price: PriceConfig = msgspec.field(default_factory=PriceConfig)
    assign: AssignConfig = msgspec.field(default_factory=AssignConfig)
    weekly_interval_days: int = 7
