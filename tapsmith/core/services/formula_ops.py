"""
Formula operations — generate, bump, inspect and write tap formulas.

Service layer for the CLI. Every function returns a plain dict: either
the result, or ``{"error": "..."}`` describing what went wrong.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from pathlib import Path

from tapsmith.core.models.formula import FormulaRecord
from tapsmith.core.services.formula_parser import FormulaParseError, parse_formula_file
from tapsmith.core.services.generators.formula import (
    MissingFieldError,
    default_archive,
    default_homepage,
    generate_formula,
)

logger = logging.getLogger(__name__)


def _formula_file(tap_root: Path, formula_dir: str, formula_name: str) -> Path:
    """Locate ``<formula_dir>/<name>.rb``, accepting ``toml`` or ``toml.rb``.

    Matching is against the directory listing: an exact stem first, then
    a case-insensitive one, so ``tomlq`` finds ``TomlQ.rb`` under its
    on-disk spelling. The as-given path is returned when nothing matches.
    """
    stem = formula_name[:-3] if formula_name.endswith(".rb") else formula_name
    directory = tap_root / formula_dir
    if not directory.is_dir():
        return directory / f"{stem}.rb"

    files = sorted(p for p in directory.glob("*.rb") if p.is_file())
    for path in files:
        if path.stem == stem:
            return path
    for path in files:
        if path.stem.casefold() == stem.casefold():
            return path

    return directory / f"{stem}.rb"


# ── Generate ────────────────────────────────────────────────────


def generate(
    tap_root: Path,
    fields: Mapping[str, object],
    *,
    formula_dir: str = "Formula",
    overwrite: bool = False,
) -> dict:
    """Generate a formula from fields.

    Returns:
        {"file": {...}, "exists": bool} or {"error": "...", "missing": [...]}
    """
    try:
        generated = generate_formula(fields, formula_dir=formula_dir, overwrite=overwrite)
    except MissingFieldError as e:
        return {"error": str(e), "missing": e.fields}

    exists = (tap_root / generated.path).exists()
    logger.info("Generated %s (exists=%s)", generated.path, exists)
    return {"file": generated.model_dump(), "exists": exists}


def next_fields(record: FormulaRecord, version: str, sha256: str) -> dict[str, str]:
    """Fields for the next release of an existing formula.

    Homepage and archive are carried over only when they were set
    explicitly, so default ones follow the new version. A custom archive
    name that embeds the old version gets the new one substituted, but
    only where the old version stands alone (``toml-6-x86_64`` at 6 keeps
    its ``x86_64``).
    """
    fields = {
        "name": record.name,
        "description": record.description,
        "site": record.site,
        "repo": record.repo,
        "binary_name": record.binary_name,
        "version": version,
        "sha256": sha256,
    }
    if record.homepage != default_homepage(record.site, record.repo):
        fields["homepage"] = record.homepage
    if record.archive != default_archive(record.binary_name, record.version):
        fields["archive"] = _replace_version(record.archive, record.version, version)
    return fields


def _replace_version(archive: str, old: str, new: str) -> str:
    """Swap a whole-token version in an archive name."""
    pattern = rf"(?<![0-9.]){re.escape(old)}(?![0-9.])"
    return re.sub(pattern, lambda _: new, archive)


def bump(
    tap_root: Path,
    formula_name: str,
    version: str,
    sha256: str,
    *,
    formula_dir: str = "Formula",
) -> dict:
    """Produce the next version of an existing formula.

    The existing file is read but never modified here; the returned file
    supersedes it once written.

    Returns:
        {"file": {...}, "previous": {...}} or {"error": "..."}
    """
    path = _formula_file(tap_root, formula_dir, formula_name)
    if not path.is_file():
        return {"error": f"Formula not found: {formula_dir}/{path.name}"}

    try:
        current = parse_formula_file(path)
    except FormulaParseError as e:
        return {"error": str(e)}

    if current.version == version:
        return {"error": f"{current.name} is already at version {version}"}

    try:
        generated = generate_formula(
            next_fields(current, version, sha256),
            formula_dir=formula_dir,
            overwrite=True,
        )
    except MissingFieldError as e:
        return {"error": str(e), "missing": e.fields}

    logger.info("Bumped %s %s → %s", current.name, current.version, version)
    return {"file": generated.model_dump(), "previous": current.summary()}


# ── Inspect ─────────────────────────────────────────────────────


def list_formulas(tap_root: Path, *, formula_dir: str = "Formula") -> dict:
    """Summarize every formula in the tap.

    Returns:
        {"formulas": [...], "errors": [...]}
    """
    directory = tap_root / formula_dir
    formulas: list[dict] = []
    errors: list[str] = []

    if not directory.is_dir():
        return {"formulas": formulas, "errors": errors}

    for path in sorted(directory.glob("*.rb")):
        try:
            record = parse_formula_file(path)
        except FormulaParseError as e:
            errors.append(str(e))
            continue
        formulas.append({"file": f"{formula_dir}/{path.name}", **record.summary()})

    return {"formulas": formulas, "errors": errors}


def show_formula(tap_root: Path, formula_name: str, *, formula_dir: str = "Formula") -> dict:
    """Return the full record of one formula.

    Returns:
        {"formula": {...}, "file": "..."} or {"error": "..."}
    """
    path = _formula_file(tap_root, formula_dir, formula_name)
    if not path.is_file():
        return {"error": f"Formula not found: {formula_dir}/{path.name}"}

    try:
        record = parse_formula_file(path)
    except FormulaParseError as e:
        return {"error": str(e)}

    return {"formula": record.model_dump(), "file": f"{formula_dir}/{path.name}"}


# ── Write ───────────────────────────────────────────────────────


def write_generated_file(tap_root: Path, file_data: dict) -> dict:
    """Write a GeneratedFile to disk.

    Args:
        tap_root: Tap root directory.
        file_data: Dict with 'path', 'content', 'overwrite'.

    Returns:
        {"ok": True, "path": "...", "written": True} or {"error": "..."}
    """
    rel_path = file_data.get("path", "")
    content = file_data.get("content", "")
    overwrite = file_data.get("overwrite", False)

    if not rel_path or not content:
        return {"error": "Missing path or content"}

    target = tap_root / rel_path

    if target.exists() and not overwrite:
        return {
            "error": f"File already exists: {rel_path} (use --force to replace)",
            "path": rel_path,
            "written": False,
        }

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    logger.info("Wrote formula: %s", target)

    return {"ok": True, "path": rel_path, "written": True}
