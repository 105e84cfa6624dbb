"""
Tap check use case — validate every formula in the tap and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from tapsmith.core.models.formula import FormulaRecord
from tapsmith.core.services.checksum import is_sha256
from tapsmith.core.services.formula_parser import FormulaParseError, parse_formula_file


@dataclass
class TapCheckResult:
    """Result of tap validation."""

    valid: bool = False
    tap_root: Path | None = None
    formulas: dict[str, FormulaRecord] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "tap_root": str(self.tap_root) if self.tap_root else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "formula_count": len(self.formulas),
            "formulas": {name: rec.summary() for name, rec in self.formulas.items()},
        }


def check_tap(tap_root: Path, *, formula_dir: str = "Formula") -> TapCheckResult:
    """Parse every formula in the tap and run consistency checks.

    Args:
        tap_root: Tap root directory.
        formula_dir: Directory holding ``*.rb`` formulas.

    Returns:
        TapCheckResult with validation status and any issues.
    """
    result = TapCheckResult(tap_root=tap_root)
    directory = tap_root / formula_dir

    if not directory.is_dir():
        result.warnings.append(f"No {formula_dir}/ directory. The tap has no formulas.")
        result.valid = True
        return result

    for path in sorted(directory.glob("*.rb")):
        try:
            record = parse_formula_file(path)
        except FormulaParseError as e:
            result.errors.append(str(e))
            continue
        result.formulas[path.name] = record

        if path.stem != record.binary_name:
            result.warnings.append(
                f"{path.name}: installs '{record.binary_name}', expected {record.binary_name}.rb"
            )
        if not is_sha256(record.sha256):
            result.warnings.append(f"{path.name}: sha256 is not a 64-char hex digest")

    # Check for duplicate class names across files
    names = [rec.name for rec in result.formulas.values()]
    dupes = {n for n in names if names.count(n) > 1}
    if dupes:
        result.errors.append(f"Duplicate formula classes: {', '.join(sorted(dupes))}")

    if not result.formulas and not result.errors:
        result.warnings.append(f"No formulas found in {formula_dir}/.")

    result.valid = len(result.errors) == 0
    return result
