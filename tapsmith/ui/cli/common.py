"""
Shared helpers for CLI command groups.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from tapsmith.core.models.tap import TapConfig


def resolve_tap(ctx: click.Context) -> tuple[Path, TapConfig]:
    """Resolve tap root and tap.yml settings from context or CWD."""
    from tapsmith.core.config.loader import (
        ConfigError,
        find_tap_file,
        load_tap_config,
        tap_root,
    )

    config_path: Path | None = ctx.obj.get("config_path")
    if config_path is None:
        config_path = find_tap_file()

    try:
        config = load_tap_config(config_path) if config_path else TapConfig()
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    return tap_root(config_path), config
