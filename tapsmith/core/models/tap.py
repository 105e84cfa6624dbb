"""
Tap model — optional tap.yml at the root of a tap checkout.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class TapConfig(BaseModel):
    """Tap-wide settings.

    ``defaults`` are formula fields applied underneath every generate
    call, typically ``site`` for taps whose packages share a GitHub owner.
    """

    name: str = ""
    formula_dir: str = "Formula"
    defaults: dict[str, str] = Field(default_factory=dict)
