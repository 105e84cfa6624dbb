"""
Tests for logging configuration.
"""

import logging
from pathlib import Path

import pytest

from tapsmith.core.observability.logging_config import (
    LEVEL_ENV,
    parse_level,
    resolve_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _reset_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            handler.close()
            root.removeHandler(handler)
    root.setLevel(level)


class TestParseLevel:
    def test_names(self):
        assert parse_level("debug") == logging.DEBUG
        assert parse_level("ERROR") == logging.ERROR

    def test_unknown_falls_back_to_warning(self):
        assert parse_level("loud") == logging.WARNING
        assert parse_level(None) == logging.WARNING
        assert parse_level("") == logging.WARNING


class TestSetupLogging:
    def test_console_only(self):
        setup_logging(level="INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].level == logging.INFO

    def test_file_handler_lower_level(self, tmp_path: Path):
        log_file = tmp_path / "tapsmith.log"
        setup_logging(level="WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        logging.getLogger("tapsmith.test").debug("bumped toml")
        for handler in root.handlers:
            handler.flush()
        assert "bumped toml" in log_file.read_text()

    def test_repeat_setup_replaces_handlers(self):
        setup_logging(level="DEBUG")
        setup_logging(level="ERROR")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.ERROR


class TestResolveLevel:
    def test_flag_precedence(self):
        assert resolve_level(debug=True, verbose=True, quiet=True, environ={}) == "DEBUG"
        assert resolve_level(verbose=True, quiet=True, environ={}) == "INFO"
        assert resolve_level(quiet=True, environ={LEVEL_ENV: "DEBUG"}) == "ERROR"

    def test_env_then_default(self):
        assert resolve_level(environ={LEVEL_ENV: "INFO"}) == "INFO"
        assert resolve_level(environ={}) == "WARNING"

    def test_quiet_hides_warnings(self, capsys):
        setup_logging(level=resolve_level(quiet=True, environ={}))
        logging.getLogger("tapsmith.test").warning("archive not found")
        logging.getLogger("tapsmith.test").error("bump failed")
        err = capsys.readouterr().err
        assert "archive not found" not in err
        assert "bump failed" in err
