"""
Tests for the package layout — every directory under tapsmith/ is a
regular package.
"""

from pathlib import Path


def test_every_package_has_init(project_root: Path):
    package = project_root / "tapsmith"
    missing = [
        str(d.relative_to(project_root))
        for d in [package, *package.rglob("*")]
        if d.is_dir() and d.name != "__pycache__" and not (d / "__init__.py").is_file()
    ]
    assert missing == []
