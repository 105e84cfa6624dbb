"""
Generated file model — what every generator hands back.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A file produced by a generator but not yet written.

    Attributes:
        path:      Path relative to the tap root (e.g. ``Formula/toml.rb``).
        content:   Full file content.
        overwrite: Whether an existing file at ``path`` may be replaced.
        reason:    Why this file was generated.
    """

    path: str
    content: str
    overwrite: bool = False
    reason: str = ""
