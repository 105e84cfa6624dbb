"""
Configuration loader — tap.yml, field files and environment variables.

tap.yml is optional. When present it marks the tap root and supplies
default formula fields. Field files are flat YAML mappings naming the
fields of a single formula.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml

from tapsmith.core.models.tap import TapConfig
from tapsmith.core.services.generators.formula import (
    FIELD_ALIASES,
    OPTIONAL_FIELDS,
    REQUIRED_FIELDS,
    canonical_field,
)

logger = logging.getLogger(__name__)

# Default config filename
TAP_CONFIG_FILE = "tap.yml"


class ConfigError(Exception):
    """Raised when tap configuration or a field file is invalid."""


def find_tap_file(start_dir: Path | None = None) -> Path | None:
    """Search for tap.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to tap.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / TAP_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def _read_mapping(path: Path) -> dict:
    """Read a YAML file that must contain a mapping."""
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return data


def _stringify(data: Mapping, source: Path) -> dict[str, str]:
    """Coerce scalar YAML values to strings (``version: 1.0`` → ``"1.0"``)."""
    out: dict[str, str] = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, (dict, list)):
            raise ConfigError(f"Field '{key}' in {source} must be a scalar value")
        out[canonical_field(str(key))] = str(value)
    return out


def load_tap_config(path: Path | None = None) -> TapConfig:
    """Load tap.yml, or return defaults when there is none.

    Args:
        path: Explicit path to tap.yml. If None, searches upward.

    Raises:
        ConfigError: If the file exists but is invalid.
    """
    if path is None:
        path = find_tap_file()

    if path is None:
        logger.debug("No %s found, using defaults", TAP_CONFIG_FILE)
        return TapConfig()

    logger.debug("Loading tap config from %s", path)
    data = _read_mapping(path)

    defaults = data.get("defaults") or {}
    if not isinstance(defaults, dict):
        raise ConfigError(f"'defaults' in {path} must be a mapping")
    data["defaults"] = _stringify(defaults, path)

    try:
        config = TapConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid tap configuration: {e}") from e

    logger.info("Loaded tap config %s (%d default fields)", path, len(config.defaults))
    return config


def tap_root(config_path: Path | None) -> Path:
    """Tap root directory: the folder holding tap.yml, else cwd."""
    return config_path.parent.resolve() if config_path else Path.cwd()


def load_field_file(path: Path) -> dict[str, str]:
    """Load a formula field file.

    The mapping may be flat or wrapped under a ``formula:`` key.

    Raises:
        ConfigError: If the file is missing or not a mapping of scalars.
    """
    data = _read_mapping(path)
    if "formula" in data:
        data = data["formula"]
        if not isinstance(data, dict):
            raise ConfigError(f"'formula' in {path} must be a mapping")

    fields = _stringify(data, path)
    logger.info("Loaded %d field(s) from %s", len(fields), path)
    return fields


def fields_from_env(environ: Mapping[str, str]) -> dict[str, str]:
    """Collect formula fields from upper-case environment variables.

    Names match the template variables: NAME, DESCRIPTION, SITE, REPO,
    VERSION, SHA256, HOMEPAGE, ARCHIVE, BIN (or BINARY_NAME).
    """
    names = {f.upper(): f for f in (*REQUIRED_FIELDS, *OPTIONAL_FIELDS)}
    names.update({alias.upper(): f for alias, f in FIELD_ALIASES.items()})

    fields: dict[str, str] = {}
    for var, field_name in names.items():
        value = environ.get(var)
        if value:
            fields[field_name] = value
    return fields


def parse_assignments(items: tuple[str, ...] | list[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` strings into a field mapping.

    Raises:
        ConfigError: If an item has no ``=``.
    """
    fields: dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ConfigError(f"Expected KEY=VALUE, got: {item}")
        fields[canonical_field(key.strip())] = value
    return fields
