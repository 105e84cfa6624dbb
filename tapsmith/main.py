"""
tapsmith — CLI entrypoint.

Usage:
    python -m tapsmith.main --help
    python -m tapsmith.main formula generate --from toml.yml
    python -m tapsmith.main tap check
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from tapsmith import __version__
from tapsmith.core.observability.logging_config import (
    FILE_ENV,
    FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="tapsmith")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to tap.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """tapsmith — generate and maintain Homebrew tap formulas."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(FILE_ENV),
        log_file_level=os.environ.get(FILE_LEVEL_ENV),
    )


# ── Register sub-command groups from tapsmith/ui/cli/ ─────────────

from tapsmith.ui.cli.formula import formula
from tapsmith.ui.cli.tap import tap

cli.add_command(formula)
cli.add_command(tap)


if __name__ == "__main__":
    cli()
