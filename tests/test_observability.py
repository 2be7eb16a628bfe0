"""
Tests for observability — logging setup and level resolution.
"""

import logging

import pytest

from toolbin.core.observability.logging_config import level_from_flags, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLevelFromFlags:

    def test_flag_precedence(self):
        assert level_from_flags(debug=True, verbose=True, quiet=True) == "DEBUG"
        assert level_from_flags(verbose=True, quiet=True) == "INFO"
        assert level_from_flags(quiet=True) == "ERROR"

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("TOOLBIN_LOG_LEVEL", "INFO")
        assert level_from_flags() == "INFO"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("TOOLBIN_LOG_LEVEL", raising=False)
        assert level_from_flags() == "WARNING"


class TestSetupLogging:

    def test_console_level(self, restore_root_logger):
        setup_logging(level="INFO")
        root = restore_root_logger
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].level == logging.INFO

    def test_unknown_level_falls_back(self, restore_root_logger):
        setup_logging(level="LOUD")
        assert restore_root_logger.level == logging.WARNING

    def test_file_handler(self, tmp_path, restore_root_logger):
        log_file = tmp_path / "toolbin.log"
        setup_logging(level="WARNING", log_file=str(log_file), log_file_level="DEBUG")

        root = restore_root_logger
        assert root.level == logging.DEBUG
        logging.getLogger("toolbin.test").debug("to the file only")
        for handler in root.handlers:
            handler.flush()
        assert "to the file only" in log_file.read_text()

    def test_third_party_quieted(self, restore_root_logger):
        setup_logging(level="INFO")
        assert logging.getLogger("urllib3").level == logging.WARNING
