"""
Formula parser — read a generated formula back into a FormulaRecord.

Only the layout produced by ``generators.formula`` is understood: one
class block with ``desc``, ``homepage``, ``url``, ``sha256``, ``version``
and a single ``bin.install`` in ``def install``.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from tapsmith.core.models.formula import FormulaRecord
from tapsmith.core.services.generators.formula import ARCHIVE_SUFFIX, FormulaError

logger = logging.getLogger(__name__)


class FormulaParseError(FormulaError):
    """Raised when a file is not a formula in the generated layout."""


_CLASS_RE = re.compile(r"^class\s+(\S+)\s*<\s*Formula\s*$", re.MULTILINE)
# Body of a double-quoted Ruby string, backslash escapes included
_QUOTED = r'"((?:[^"\\]|\\.)*)"'
_UNESCAPES = {"n": "\n", "t": "\t"}

_INSTALL_RE = re.compile(r"^\s*bin\.install\s+" + _QUOTED + r"\s*$", re.MULTILINE)
_URL_RE = re.compile(
    r"^(?P<site>.+)/(?P<repo>[^/]+)/releases/download/v(?P<tag>[^/]+)/(?P<archive>[^/]+)"
    + re.escape(ARCHIVE_SUFFIX)
    + r"$"
)

# Formula statement → record field
_STATEMENTS = {
    "desc": "description",
    "homepage": "homepage",
    "url": "download_url",
    "sha256": "sha256",
    "version": "version",
}


def _unescape(body: str) -> str:
    return re.sub(r"\\(.)", lambda m: _UNESCAPES.get(m.group(1), m.group(1)), body)


def _statement(text: str, keyword: str) -> str | None:
    match = re.search(rf"^\s*{keyword}\s+" + _QUOTED + r"\s*$", text, re.MULTILINE)
    return _unescape(match.group(1)) if match else None


def parse_formula(text: str) -> FormulaRecord:
    """Parse formula text into a record.

    Raises:
        FormulaParseError: If a statement is missing or the URL is not a
            release download URL.
    """
    class_match = _CLASS_RE.search(text)
    if class_match is None:
        raise FormulaParseError("No 'class <Name> < Formula' declaration found")

    values: dict[str, str] = {"name": class_match.group(1)}
    for keyword, field_name in _STATEMENTS.items():
        value = _statement(text, keyword)
        if value is None:
            raise FormulaParseError(f"Missing '{keyword}' statement")
        values[field_name] = value

    install_match = _INSTALL_RE.search(text)
    if install_match is None:
        raise FormulaParseError("Missing 'bin.install' statement")
    values["binary_name"] = _unescape(install_match.group(1))

    url_match = _URL_RE.match(values["download_url"])
    if url_match is None:
        raise FormulaParseError(f"Unrecognized download URL: {values['download_url']}")
    if url_match.group("tag") != values["version"]:
        raise FormulaParseError(
            f"URL tag v{url_match.group('tag')} does not match version {values['version']}"
        )

    return FormulaRecord(
        site=url_match.group("site"),
        repo=url_match.group("repo"),
        archive=url_match.group("archive"),
        **values,
    )


def parse_formula_file(path: Path) -> FormulaRecord:
    """Read and parse a formula file.

    Raises:
        FormulaParseError: If the file cannot be read or parsed.
    """
    logger.debug("Parsing formula %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FormulaParseError(f"Cannot read {path}: {e}") from e

    try:
        return parse_formula(text)
    except FormulaParseError as e:
        raise FormulaParseError(f"{path.name}: {e}") from e
