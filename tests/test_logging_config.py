"""Tests for boardcore/logging_config.py and boardcore/config.py."""

import logging

import pytest

from boardcore.config import env_flag
from boardcore.logging_config import (
    COMPACT_FORMAT,
    DEFAULT_FORMAT,
    LogContext,
    get_logger,
    setup_logging,
)


class TestSetupLogging:
    """Test setup_logging function."""

    def test_returns_logger(self):
        """setup_logging should return a Logger instance."""
        logger = setup_logging("bc_test_logger_1")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "bc_test_logger_1"

    def test_logger_level_custom(self):
        logger = setup_logging("bc_test_logger_2", level=logging.DEBUG)
        assert logger.level == logging.DEBUG

    def test_logger_level_string(self):
        """Level can be specified as string."""
        logger = setup_logging("bc_test_logger_3", level="warning")
        assert logger.level == logging.WARNING

    def test_idempotent_logger_creation(self):
        """Calling setup_logging twice does not add duplicate handlers."""
        logger1 = setup_logging("bc_test_logger_4")
        handler_count = len(logger1.handlers)
        logger2 = setup_logging("bc_test_logger_4")
        assert logger1 is logger2
        assert len(logger2.handlers) == handler_count

    def test_console_handler_disabled(self):
        logger = setup_logging("bc_test_logger_5", console=False)
        assert not any(isinstance(h, logging.StreamHandler) for h in logger.handlers)

    def test_format_presets(self):
        logger = setup_logging("bc_test_logger_6", format_style="compact")
        assert logger.handlers[0].formatter._fmt == COMPACT_FORMAT

    def test_unknown_format_falls_back(self):
        logger = setup_logging("bc_test_logger_7", format_style="fancy")
        assert logger.handlers[0].formatter._fmt == DEFAULT_FORMAT

    def test_file_handler(self, tmp_path):
        """File handler writes to the given path, once."""
        log_file = tmp_path / "logs" / "boardcore.log"
        logger = setup_logging("bc_test_logger_8", log_file=log_file, console=False)
        setup_logging("bc_test_logger_8", log_file=log_file, console=False)
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        logger.warning("written")
        file_handlers[0].flush()
        assert "written" in log_file.read_text()

    def test_get_logger(self):
        assert get_logger("boardcore.test") is logging.getLogger("boardcore.test")


class TestLogContext:
    """Test LogContext context manager."""

    def test_changes_and_restores_level(self):
        logger = setup_logging("bc_test_ctx", level=logging.INFO, console=False)
        with LogContext(logger, logging.DEBUG) as ctx_logger:
            assert ctx_logger is logger
            assert logger.level == logging.DEBUG
        assert logger.level == logging.INFO

    def test_restores_on_exception(self):
        logger = setup_logging("bc_test_ctx_2", level=logging.WARNING, console=False)
        with pytest.raises(RuntimeError):
            with LogContext(logger, logging.DEBUG):
                raise RuntimeError("boom")
        assert logger.level == logging.WARNING


class TestEnvFlag:

    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_truthy(self, monkeypatch, value):
        monkeypatch.setenv("BC_TEST_FLAG", value)
        assert env_flag("BC_TEST_FLAG")

    @pytest.mark.parametrize("value", ["0", "false", "", "nope"])
    def test_falsy(self, monkeypatch, value):
        monkeypatch.setenv("BC_TEST_FLAG", value)
        assert not env_flag("BC_TEST_FLAG")

    def test_default(self, monkeypatch):
        monkeypatch.delenv("BC_TEST_FLAG", raising=False)
        assert not env_flag("BC_TEST_FLAG")
        assert env_flag("BC_TEST_FLAG", default="1")
