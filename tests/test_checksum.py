"""
Tests for archive checksums.
"""

from pathlib import Path

import pytest

from tapsmith.core.services.checksum import is_sha256, sha256_file


class TestSha256File:
    def test_known_digest(self, tmp_path: Path):
        archive = tmp_path / "toml_macos_v0.2.4.tar.gz"
        archive.write_bytes(b"hello")
        assert sha256_file(archive) == (
            "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        )

    def test_large_file_streams(self, tmp_path: Path):
        """Files larger than one chunk hash the same as hashlib in one go."""
        import hashlib

        data = b"x" * (3 * 1024 * 1024 + 17)
        archive = tmp_path / "big.tar.gz"
        archive.write_bytes(data)
        assert sha256_file(archive) == hashlib.sha256(data).hexdigest()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            sha256_file(tmp_path / "missing.tar.gz")


class TestIsSha256:
    def test_valid(self):
        assert is_sha256("ab" * 32)
        assert is_sha256("AB" * 32)

    def test_wrong_length(self):
        assert not is_sha256("ab" * 31)
        assert not is_sha256("")

    def test_not_hex(self):
        assert not is_sha256("zz" * 32)
        assert not is_sha256("0x" + "ab" * 31)
