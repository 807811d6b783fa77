"""Bot configuration models, loading and environment settings."""

from __future__ import annotations

from .loader import load_config, parse_config
from .models import AssignConfig, BotConfig, PriceConfig, PriorityLabel, TimeLabel
from .schema import SCHEMA_ID, build_config_schema, write_config_schema
from .settings import BotSettings
from .validation import ConfigValidationError, validate_config

__all__ = [
    "SCHEMA_ID",
    "AssignConfig",
    "BotConfig",
    "BotSettings",
    "ConfigValidationError",
    "PriceConfig",
    "PriorityLabel",
    "TimeLabel",
    "build_config_schema",
    "load_config",
    "parse_config",
    "validate_config",
    "write_config_schema",
]
