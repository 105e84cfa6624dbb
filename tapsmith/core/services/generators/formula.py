"""
Formula generator — produce a Homebrew formula from named fields.

Required fields: name, description, site, repo, version, sha256.
Optional fields fall back to defaults, resolved in this order:

    binary_name  ←  lower(name)
    homepage     ←  site + "/" + repo
    archive      ←  binary_name + "_macos_v" + version

The generator is pure: it never touches the network or the filesystem.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from tapsmith.core.models.formula import FormulaRecord
from tapsmith.core.models.template import GeneratedFile

logger = logging.getLogger(__name__)


REQUIRED_FIELDS: tuple[str, ...] = (
    "name",
    "description",
    "site",
    "repo",
    "version",
    "sha256",
)

OPTIONAL_FIELDS: tuple[str, ...] = ("homepage", "archive", "binary_name")

# Template variable spellings
FIELD_ALIASES: dict[str, str] = {"bin": "binary_name"}

ARCHIVE_SUFFIX = ".tar.gz"


class FormulaError(Exception):
    """Base class for formula generation and parsing failures."""


class MissingFieldError(FormulaError):
    """Raised when one or more required fields are absent."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__(f"Missing required field(s): {', '.join(fields)}")


# ── Formula layout ──────────────────────────────────────────────


_FORMULA_TEMPLATE = """\
class {name} < Formula
  desc "{description}"
  homepage "{homepage}"
  url "{download_url}"
  sha256 "{sha256}"
  version "{version}"

  def install
    bin.install "{binary_name}"
  end
end
"""

# Characters that need a backslash inside a double-quoted Ruby string
_RUBY_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t"}
_RUBY_ESCAPE_RE = re.compile(r'[\\"\n\t]|#(?=[{$@])')


def ruby_string(value: str) -> str:
    """Escape ``value`` for a double-quoted Ruby literal (no interpolation)."""
    return _RUBY_ESCAPE_RE.sub(lambda m: _RUBY_ESCAPES.get(m.group(0), "\\#"), value)


# ── Field resolution ────────────────────────────────────────────


def canonical_field(key: str) -> str:
    """Lower-case a field name and map template spellings (``BIN``)."""
    k = key.lower()
    return FIELD_ALIASES.get(k, k)


def _normalize(fields: Mapping[str, object]) -> dict[str, str]:
    """Lower-case keys and drop absent values (None or blank).

    Upper-case keys (``NAME``, ``SHA256``) are the variable names of the
    original tap template and are accepted as-is.
    """
    known = set(REQUIRED_FIELDS) | set(OPTIONAL_FIELDS)
    out: dict[str, str] = {}
    for key, value in fields.items():
        k = canonical_field(key)
        if k not in known:
            logger.debug("Ignoring unknown formula field: %s", key)
            continue
        if value is None:
            continue
        text = str(value)
        if not text.strip():
            continue
        out[k] = text
    return out


def default_archive(binary_name: str, version: str) -> str:
    """Archive base name used when none is given."""
    return f"{binary_name}_macos_v{version}"


def default_homepage(site: str, repo: str) -> str:
    """Homepage used when none is given."""
    return f"{site}/{repo}"


def download_url(site: str, repo: str, version: str, archive: str) -> str:
    """GitHub release download URL for ``archive``."""
    return f"{site}/{repo}/releases/download/v{version}/{archive}{ARCHIVE_SUFFIX}"


def resolve_fields(fields: Mapping[str, object]) -> FormulaRecord:
    """Apply defaults and build a FormulaRecord.

    Args:
        fields: Field name → value. Keys are case-insensitive.

    Returns:
        The resolved, frozen FormulaRecord.

    Raises:
        MissingFieldError: If any required field is absent.
    """
    values = _normalize(fields)

    missing = [f for f in REQUIRED_FIELDS if f not in values]
    if missing:
        raise MissingFieldError(missing)

    binary_name = values.get("binary_name") or values["name"].lower()
    homepage = values.get("homepage") or default_homepage(values["site"], values["repo"])
    archive = values.get("archive") or default_archive(binary_name, values["version"])

    return FormulaRecord(
        name=values["name"],
        description=values["description"],
        homepage=homepage,
        download_url=download_url(values["site"], values["repo"], values["version"], archive),
        sha256=values["sha256"],
        version=values["version"],
        binary_name=binary_name,
        site=values["site"],
        repo=values["repo"],
        archive=archive,
    )


# ── Public API ──────────────────────────────────────────────────


def render_formula(record: FormulaRecord) -> str:
    """Render a record as Formula-language text."""
    return _FORMULA_TEMPLATE.format(
        name=record.name,
        description=ruby_string(record.description),
        homepage=ruby_string(record.homepage),
        download_url=ruby_string(record.download_url),
        sha256=ruby_string(record.sha256),
        version=ruby_string(record.version),
        binary_name=ruby_string(record.binary_name),
    )


def formula_path(record: FormulaRecord, formula_dir: str = "Formula") -> str:
    """Tap-relative path of the file holding ``record``."""
    return f"{formula_dir}/{record.binary_name}.rb"


def generate_formula(
    fields: Mapping[str, object],
    *,
    formula_dir: str = "Formula",
    overwrite: bool = False,
) -> GeneratedFile:
    """Generate the formula file for a set of fields.

    Args:
        fields: Field name → value (see module docstring).
        formula_dir: Tap directory holding formulas.
        overwrite: Whether the result may replace an existing file.

    Returns:
        GeneratedFile with the rendered formula.

    Raises:
        MissingFieldError: If any required field is absent.
    """
    record = resolve_fields(fields)
    logger.debug("Resolved formula %s %s (%s)", record.name, record.version, record.archive)

    return GeneratedFile(
        path=formula_path(record, formula_dir),
        content=render_formula(record),
        overwrite=overwrite,
        reason=f"Generated formula for {record.name} {record.version}",
    )


def required_fields() -> list[str]:
    """Return the field names every formula must provide."""
    return list(REQUIRED_FIELDS)


def optional_fields() -> list[str]:
    """Return the field names that have a computed default."""
    return list(OPTIONAL_FIELDS)
