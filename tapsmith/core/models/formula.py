"""
Formula record — one released version of one package in the tap.

A record is frozen: publishing a new upstream release produces a new
record, which supersedes the previous one.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FormulaRecord(BaseModel):
    """Fully resolved formula fields, as written to ``Formula/<binary>.rb``.

    ``site``, ``repo`` and ``archive`` are the inputs ``download_url`` was
    built from. They are kept so the record can be bumped to a new version.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    homepage: str
    download_url: str
    sha256: str
    version: str
    binary_name: str

    site: str
    repo: str
    archive: str

    def summary(self) -> dict:
        """Short form used by listings."""
        return {
            "name": self.name,
            "version": self.version,
            "binary_name": self.binary_name,
            "homepage": self.homepage,
        }
