"""YAML loader for bot configuration files."""

from __future__ import annotations

from pathlib import Path

import msgspec
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .models import BotConfig
from .validation import ConfigValidationError, validate_config

YAML_VERSION = (1, 2)


def load_config(path: Path | str) -> BotConfig:
    """Parse and validate a YAML configuration file.

    An empty file yields the default configuration.
    """
    yaml = _yaml()
    path_obj = Path(path)

    try:
        loaded = yaml.load(path_obj.read_text(encoding="utf-8"))
    except (OSError, YAMLError) as exc:
        raise ConfigValidationError([f"failed to parse YAML: {exc}"]) from exc

    if loaded is None:
        return BotConfig()

    return parse_config(loaded)


def parse_config(raw: object) -> BotConfig:
    """Convert an already-decoded mapping into a validated configuration."""
    try:
        config = msgspec.convert(raw, type=BotConfig)
    except msgspec.ValidationError as exc:
        raise ConfigValidationError([f"schema validation failed: {exc}"]) from exc

    return validate_config(config)


def _yaml() -> YAML:
    yaml = YAML(typ="safe")
    yaml.version = YAML_VERSION
    yaml.allow_duplicate_keys = False
    return yaml
