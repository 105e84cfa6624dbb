"""
Archive checksums — compute the sha256 a formula pins.
"""

from __future__ import annotations

import hashlib
import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024
_SHA256_RE = re.compile(r"[0-9a-fA-F]{64}")


def sha256_file(path: Path) -> str:
    """Return the hex SHA-256 digest of a local file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """
    digest = hashlib.sha256()
    with path.open("rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
            digest.update(chunk)

    result = digest.hexdigest()
    logger.info("sha256 %s = %s", path.name, result)
    return result


def is_sha256(value: str) -> bool:
    """Whether ``value`` looks like a hex SHA-256 digest."""
    return _SHA256_RE.fullmatch(value) is not None
