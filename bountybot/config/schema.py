"""JSON Schema generation for the bot configuration file."""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path  # noqa: TC003

import msgspec

from .models import BotConfig

SCHEMA_ID = "https://bountybot.example/schemas/config.json"


def build_config_schema() -> dict[str, typ.Any]:
    """Return the JSON Schema for :class:`BotConfig` with ``$id`` set."""
    schema = msgspec.json.schema(BotConfig)
    schema["$id"] = SCHEMA_ID
    return schema


def write_config_schema(path: Path) -> Path:
    """Write the schema to ``path``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(build_config_schema(), indent=2), encoding="utf-8")
    return path
