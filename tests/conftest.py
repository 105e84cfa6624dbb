"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

TOML_SHA256 = "f3cbf7c4c8c8d0f346080815cc8fe756b1d43977b51bbe7db81eec6b37d2f088"

TOML_FORMULA = """\
class Toml < Formula
  desc "A command line utility written in Rust download, inspect and compare Substrate based chains WASM Runtimes"
  homepage "https://github.com/chevdor/toml-cli"
  url "https://github.com/chevdor/toml-cli/releases/download/v0.2.1/toml_macos_v0.2.1.tar.gz"
  sha256 "f3cbf7c4c8c8d0f346080815cc8fe756b1d43977b51bbe7db81eec6b37d2f088"
  version "0.2.1"

  def install
    bin.install "toml"
  end
end
"""


@pytest.fixture
def project_root() -> Path:
    """Return the repository root (a tap with Formula/toml.rb)."""
    return Path(__file__).parent.parent


@pytest.fixture
def toml_fields() -> dict[str, str]:
    """Required fields of the toml formula at 0.2.1."""
    return {
        "name": "Toml",
        "description": (
            "A command line utility written in Rust download, inspect and "
            "compare Substrate based chains WASM Runtimes"
        ),
        "site": "https://github.com/chevdor",
        "repo": "toml-cli",
        "version": "0.2.1",
        "sha256": TOML_SHA256,
    }


@pytest.fixture
def toml_formula_text() -> str:
    """Text of the published toml 0.2.1 formula."""
    return TOML_FORMULA


@pytest.fixture
def tap_dir(tmp_path: Path) -> Path:
    """A temporary tap containing Formula/toml.rb."""
    formula_dir = tmp_path / "Formula"
    formula_dir.mkdir()
    (formula_dir / "toml.rb").write_text(TOML_FORMULA, encoding="utf-8")
    return tmp_path
