"""
Tests for observability — logging setup.
"""

import logging
from pathlib import Path

import pytest

from pkgpilot.core.observability.logging_config import parse_level, setup_logging


class TestParseLevel:
    @pytest.mark.parametrize("name, expected", [
        ("DEBUG", logging.DEBUG),
        ("info", logging.INFO),
        ("Error", logging.ERROR),
        ("bogus", logging.WARNING),
        ("", logging.WARNING),
        (None, logging.WARNING),
    ])
    def test_levels(self, name, expected):
        assert parse_level(name) == expected


class TestSetupLogging:
    def test_console_only(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.INFO

    def test_replaces_existing_handlers(self):
        setup_logging("INFO")
        setup_logging("DEBUG")
        assert len(logging.getLogger().handlers) == 1

    def test_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "pkgpilot.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert len(root.handlers) == 2
        assert root.level == logging.DEBUG

        logging.getLogger("pkgpilot.test").debug("to file only")
        for h in root.handlers:
            h.flush()
        assert "to file only" in log_file.read_text()

    def test_leaves_other_loggers_alone(self):
        logging.getLogger("pkgpilot.core").setLevel(logging.NOTSET)
        setup_logging("ERROR")
        assert logging.getLogger("pkgpilot.core").level == logging.NOTSET
