"""Validation rules for the bot configuration."""

from __future__ import annotations

import collections
import typing as typ

if typ.TYPE_CHECKING:
    from .models import BotConfig


class ConfigValidationError(ValueError):
    """Raised when a configuration document fails validation."""

    def __init__(self, issues: list[str]) -> None:
        """Capture validation issues whilst preserving the aggregated message."""
        super().__init__("\n".join(issues))
        self.issues = issues


def _duplicates(names: typ.Iterable[str]) -> list[str]:
    counts = collections.Counter(names)
    return sorted(name for name, count in counts.items() if count > 1)


def validate_config(config: BotConfig) -> BotConfig:
    """Validate a configuration instance, returning it when all checks pass."""
    issues: list[str] = []

    if config.price.base_multiplier <= 0:
        issues.append("price.base_multiplier must be positive")

    issues.extend(
        f"duplicate time label '{name}'"
        for name in _duplicates(label.name for label in config.price.time_labels)
    )
    issues.extend(
        f"duplicate priority label '{name}'"
        for name in _duplicates(label.name for label in config.price.priority_labels)
    )

    for label in config.price.time_labels:
        if label.value is not None and label.value <= 0:
            issues.append(f"time label '{label.name}' must have a positive value")

    if config.weekly_interval_days < 1:
        issues.append("weekly_interval_days must be >= 1")

    if issues:
        raise ConfigValidationError(issues)

    return config
