"""
CLI commands for the tap as a whole.
"""

from __future__ import annotations

import json
import sys

import click

from tapsmith.ui.cli.common import resolve_tap


@click.group()
def tap() -> None:
    """Tap — validate the formulas of this tap."""


@tap.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Parse every formula and report problems."""
    from tapsmith.core.use_cases.tap_check import check_tap

    root, config = resolve_tap(ctx)
    result = check_tap(root, formula_dir=config.formula_dir)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        click.secho("✅ Tap is valid", fg="green", bold=True)
        click.echo(f"   Formulas: {len(result.formulas)}")
    else:
        click.secho("❌ Tap errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        sys.exit(1)
