"""
CLI commands for formulas — generate, bump, list, show.

Thin wrappers over ``tapsmith.core.services.formula_ops``.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from tapsmith.ui.cli.common import resolve_tap


def _write_or_preview(root: Path, file_data: dict, write: bool, raw: bool = False) -> None:
    """Write a generated file, or print it."""
    from tapsmith.core.services.formula_ops import write_generated_file

    if write:
        wr = write_generated_file(root, file_data)
        if "error" in wr:
            click.secho(f"❌ {wr['error']}", fg="red")
            sys.exit(1)
        click.secho(f"✅ Written: {wr['path']}", fg="green", bold=True)
        return

    if raw:
        click.echo(file_data["content"], nl=False)
        return

    click.secho(f"📄 Preview: {file_data['path']}", fg="cyan", bold=True)
    click.echo(f"   Reason: {file_data['reason']}")
    click.echo("─" * 60)
    click.echo(file_data["content"], nl=False)
    click.echo("─" * 60)
    click.secho("   (use --write to save to disk)", fg="yellow")


@click.group()
def formula() -> None:
    """Formulas — generate, bump, list, show."""


# ── Generate ────────────────────────────────────────────────────


@formula.command("generate")
@click.option(
    "--from",
    "from_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with formula fields.",
)
@click.option("--env", "use_env", is_flag=True, help="Read fields from NAME, SITE, ... env vars.")
@click.option("--set", "assignments", multiple=True, metavar="KEY=VALUE", help="Set a field.")
@click.option(
    "--archive-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Compute sha256 from a local archive.",
)
@click.option("--write", is_flag=True, help="Write to the tap (default: preview only).")
@click.option("--force", is_flag=True, help="Replace an existing formula file.")
@click.option("--raw", is_flag=True, help="Print only the formula text.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def gen_formula(
    ctx: click.Context,
    from_file: Path | None,
    use_env: bool,
    assignments: tuple[str, ...],
    archive_file: Path | None,
    write: bool,
    force: bool,
    raw: bool,
    as_json: bool,
) -> None:
    """Generate a formula from fields.

    Later sources win: tap.yml defaults, --from, --env, --set.
    """
    from tapsmith.core.config.loader import (
        ConfigError,
        fields_from_env,
        load_field_file,
        parse_assignments,
    )
    from tapsmith.core.services.checksum import sha256_file
    from tapsmith.core.services.formula_ops import generate, write_generated_file
    from tapsmith.core.services.generators.formula import required_fields

    root, config = resolve_tap(ctx)

    fields: dict[str, str] = dict(config.defaults)
    try:
        if from_file is not None:
            fields.update(load_field_file(from_file))
        if use_env:
            fields.update(fields_from_env(os.environ))
        fields.update(parse_assignments(assignments))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if archive_file is not None:
        fields["sha256"] = sha256_file(archive_file)

    result = generate(root, fields, formula_dir=config.formula_dir, overwrite=force)

    if as_json:
        if write and "file" in result:
            result["write"] = write_generated_file(root, result["file"])
        click.echo(json.dumps(result, indent=2))
        sys.exit(1 if "error" in result or "error" in result.get("write", {}) else 0)

    if "error" in result:
        click.secho(f"❌ {result['error']}", fg="red")
        click.echo(f"   Required: {', '.join(required_fields())}")
        sys.exit(1)

    _write_or_preview(root, result["file"], write, raw)


@formula.command("bump")
@click.argument("name")
@click.argument("version")
@click.option("--sha256", "sha256", default=None, help="Checksum of the new archive.")
@click.option(
    "--archive-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Compute sha256 from a local archive.",
)
@click.option("--write", is_flag=True, help="Write to the tap (default: preview only).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def bump_formula(
    ctx: click.Context,
    name: str,
    version: str,
    sha256: str | None,
    archive_file: Path | None,
    write: bool,
    as_json: bool,
) -> None:
    """Produce the next VERSION of formula NAME."""
    from tapsmith.core.services.checksum import sha256_file
    from tapsmith.core.services.formula_ops import bump, write_generated_file

    if (sha256 is None) == (archive_file is None):
        raise click.UsageError("Pass exactly one of --sha256 or --archive-file.")

    root, config = resolve_tap(ctx)
    digest = sha256 if sha256 is not None else sha256_file(archive_file)

    result = bump(root, name, version, digest, formula_dir=config.formula_dir)

    if as_json:
        if write and "file" in result:
            result["write"] = write_generated_file(root, result["file"])
        click.echo(json.dumps(result, indent=2))
        sys.exit(1 if "error" in result or "error" in result.get("write", {}) else 0)

    if "error" in result:
        click.secho(f"❌ {result['error']}", fg="red")
        sys.exit(1)

    prev = result["previous"]
    click.echo(f"   {prev['name']}: {prev['version']} → {version}")
    _write_or_preview(root, result["file"], write)


# ── Observe ─────────────────────────────────────────────────────


@formula.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_cmd(ctx: click.Context, as_json: bool) -> None:
    """List formulas in the tap."""
    from tapsmith.core.services.formula_ops import list_formulas

    root, config = resolve_tap(ctx)
    result = list_formulas(root, formula_dir=config.formula_dir)

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    items = result["formulas"]
    if not items and not result["errors"]:
        click.secho("No formulas found.", fg="yellow")
        return

    click.secho(f"🍺 Formulas ({len(items)}):", fg="cyan", bold=True)
    for f in items:
        click.echo(f"   {f['name']:<24} {f['version']:<12} {f['file']}")
    for err in result["errors"]:
        click.secho(f"   ❌ {err}", fg="red")


@formula.command("show")
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show_cmd(ctx: click.Context, name: str, as_json: bool) -> None:
    """Show the fields of formula NAME."""
    from tapsmith.core.services.formula_ops import show_formula

    root, config = resolve_tap(ctx)
    result = show_formula(root, name, formula_dir=config.formula_dir)

    if as_json:
        click.echo(json.dumps(result, indent=2))
        sys.exit(1 if "error" in result else 0)

    if "error" in result:
        click.secho(f"❌ {result['error']}", fg="red")
        sys.exit(1)

    rec = result["formula"]
    click.secho(f"🍺 {rec['name']} {rec['version']}", fg="cyan", bold=True)
    click.echo(f"   {rec['description']}")
    click.echo(f"   Homepage: {rec['homepage']}")
    click.echo(f"   URL:      {rec['download_url']}")
    click.echo(f"   sha256:   {rec['sha256']}")
    click.echo(f"   Installs: {rec['binary_name']}")
    click.echo(f"   File:     {result['file']}")


@formula.command("fields")
def fields_cmd() -> None:
    """List required and optional formula fields."""
    from tapsmith.core.services.generators.formula import optional_fields, required_fields

    click.secho("Required:", bold=True)
    for name in required_fields():
        click.echo(f"   {name}")
    click.secho("Optional:", bold=True)
    for name in optional_fields():
        click.echo(f"   {name}")
