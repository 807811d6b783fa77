"""Price derivation from time and priority labels."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .labels import select_priority_label, select_time_label

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bountybot.config.models import PriceConfig, PriorityLabel, TimeLabel

PRICE_LABEL_PREFIX = "Price: "
PRICE_LABEL_SUFFIX = " USD"


@dc.dataclass(frozen=True, slots=True)
class PricingLabels:
    """The ``timeline``/``priority``/``price`` triple stored on issue rows.

    Each member is a label name, or ``None`` when the issue lacks the
    corresponding tier.
    """

    timeline: str | None = None
    priority: str | None = None
    price: str | None = None


def calculate_price(
    base_multiplier: float, time_label: TimeLabel, priority_label: PriorityLabel
) -> float:
    """Return ``base_multiplier * time weight * priority weight``."""
    return base_multiplier * time_label.weight * priority_label.weight


def format_price_label(amount: float) -> str:
    """Render a price label, e.g. ``"Price: 2000 USD"``."""
    text = str(int(amount)) if float(amount).is_integer() else f"{amount:.2f}"
    return f"{PRICE_LABEL_PREFIX}{text}{PRICE_LABEL_SUFFIX}"


def parse_price_label(name: str) -> float | None:
    """Extract the amount from a price label name, or ``None``."""
    if not (name.startswith(PRICE_LABEL_PREFIX) and name.endswith(PRICE_LABEL_SUFFIX)):
        return None
    text = name.removeprefix(PRICE_LABEL_PREFIX).removesuffix(PRICE_LABEL_SUFFIX)
    try:
        return float(text)
    except ValueError:
        return None


def derive_pricing(
    issue_labels: cabc.Iterable[object], config: PriceConfig
) -> PricingLabels:
    """Select the governing time and priority labels and price them.

    The price is only derived when both tiers are present.
    """
    labels = list(issue_labels)
    time_label = select_time_label(labels, config.time_labels)
    priority_label = select_priority_label(labels, config.priority_labels)
    price: str | None = None
    if time_label is not None and priority_label is not None:
        price = format_price_label(
            calculate_price(config.base_multiplier, time_label, priority_label)
        )
    return PricingLabels(
        timeline=time_label.name if time_label is not None else None,
        priority=priority_label.name if priority_label is not None else None,
        price=price,
    )
