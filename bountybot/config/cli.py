"""Command-line helpers for configuration validation and schema export."""

from __future__ import annotations

import argparse
from pathlib import Path

from .loader import load_config
from .schema import write_config_schema
from .validation import ConfigValidationError


def main(argv: list[str] | None = None) -> int:
    """Validate a configuration file and optionally export its JSON Schema.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success, 1 when validation fails.

    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="YAML configuration to validate")
    parser.add_argument(
        "--schema-out",
        type=Path,
        default=None,
        help="Optional path to write the generated JSON Schema",
    )
    args = parser.parse_args(argv)

    config_path: Path = args.config
    try:
        config = load_config(config_path)
    except ConfigValidationError as exc:
        print(f"Configuration validation failed for {config_path}:")
        for issue in exc.issues:
            print(f"  - {issue}")
        return 1

    if args.schema_out:
        write_config_schema(args.schema_out)

    print(
        f"config {config_path} is valid "
        f"({len(config.price.time_labels)} time labels / "
        f"{len(config.price.priority_labels)} priority labels)"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
