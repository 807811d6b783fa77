"""Label-driven deadline and price derivation."""

from __future__ import annotations

from .deadline import DEADLINE_PREFIX, Deadline, compute_deadline, mention_logins
from .labels import (
    matched_labels,
    select_label,
    select_priority_label,
    select_time_label,
)
from .price import (
    PricingLabels,
    calculate_price,
    derive_pricing,
    format_price_label,
    parse_price_label,
)

__all__ = [
    "DEADLINE_PREFIX",
    "Deadline",
    "PricingLabels",
    "calculate_price",
    "compute_deadline",
    "derive_pricing",
    "format_price_label",
    "matched_labels",
    "mention_logins",
    "parse_price_label",
    "select_label",
    "select_priority_label",
    "select_time_label",
]
