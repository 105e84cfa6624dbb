"""
Domain models — Pydantic types for the tap.

    from tapsmith.core.models import FormulaRecord, GeneratedFile, TapConfig
"""

from tapsmith.core.models.formula import FormulaRecord
from tapsmith.core.models.tap import TapConfig
from tapsmith.core.models.template import GeneratedFile

__all__ = [
    # formula.py
    "FormulaRecord",
    # template.py
    "GeneratedFile",
    # tap.py
    "TapConfig",
]
