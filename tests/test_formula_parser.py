"""
Tests for the formula parser — formula text in → FormulaRecord out.
"""

from pathlib import Path

import pytest

from tapsmith.core.services.formula_parser import (
    FormulaParseError,
    parse_formula,
    parse_formula_file,
)
from tapsmith.core.services.generators.formula import (
    FormulaError,
    render_formula,
    resolve_fields,
)


class TestParseFormula:
    def test_published_formula(self, toml_formula_text):
        record = parse_formula(toml_formula_text)
        assert record.name == "Toml"
        assert record.version == "0.2.1"
        assert record.binary_name == "toml"
        assert record.site == "https://github.com/chevdor"
        assert record.repo == "toml-cli"
        assert record.archive == "toml_macos_v0.2.1"
        assert record.homepage == "https://github.com/chevdor/toml-cli"

    def test_matches_resolved_fields(self, toml_fields, toml_formula_text):
        assert parse_formula(toml_formula_text) == resolve_fields(toml_fields)

    def test_custom_archive_and_homepage(self, toml_fields):
        record = resolve_fields(
            {**toml_fields, "homepage": "https://toml.dev", "archive": "toml-universal"}
        )
        parsed = parse_formula(render_formula(record))
        assert parsed == record

    def test_quoted_description_round_trips(self, toml_fields):
        record = resolve_fields(
            {**toml_fields, "description": 'Edit "TOML" files, C:\\tmp and #{HOME}'}
        )
        text = render_formula(record)
        assert '  desc "Edit \\"TOML\\" files, C:\\\\tmp and \\#{HOME}"\n' in text
        assert parse_formula(text) == record

    def test_missing_class(self, toml_formula_text):
        text = toml_formula_text.replace("class Toml < Formula", "module Toml")
        with pytest.raises(FormulaParseError, match="class"):
            parse_formula(text)

    @pytest.mark.parametrize("keyword", ["desc", "homepage", "url", "sha256", "version"])
    def test_missing_statement(self, toml_formula_text, keyword):
        lines = [
            line
            for line in toml_formula_text.splitlines()
            if not line.strip().startswith(f"{keyword} ")
        ]
        with pytest.raises(FormulaParseError, match=keyword):
            parse_formula("\n".join(lines))

    def test_missing_install(self, toml_formula_text):
        text = toml_formula_text.replace('    bin.install "toml"\n', "")
        with pytest.raises(FormulaParseError, match="bin.install"):
            parse_formula(text)

    def test_non_release_url(self, toml_formula_text):
        text = toml_formula_text.replace(
            "https://github.com/chevdor/toml-cli/releases/download/v0.2.1/toml_macos_v0.2.1.tar.gz",
            "https://example.com/toml.zip",
        )
        with pytest.raises(FormulaParseError, match="download URL"):
            parse_formula(text)

    def test_url_tag_mismatch(self, toml_formula_text):
        text = toml_formula_text.replace('version "0.2.1"', 'version "0.3.0"')
        with pytest.raises(FormulaParseError, match="does not match"):
            parse_formula(text)

    def test_parse_error_is_formula_error(self):
        with pytest.raises(FormulaError):
            parse_formula("")


class TestParseFormulaFile:
    def test_reads_file(self, tap_dir: Path):
        record = parse_formula_file(tap_dir / "Formula" / "toml.rb")
        assert record.name == "Toml"

    def test_error_names_file(self, tmp_path: Path):
        path = tmp_path / "broken.rb"
        path.write_text("class Broken < Formula\nend\n")
        with pytest.raises(FormulaParseError, match="broken.rb"):
            parse_formula_file(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FormulaParseError, match="Cannot read"):
            parse_formula_file(tmp_path / "nope.rb")
