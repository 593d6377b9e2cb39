"""Tests for logging_utils module."""
import logging

import pytest

from account_client.config import LoggingSettings
from account_client.logging_utils import QUIET_LOGGERS, configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    saved_quiet = {name: logging.getLogger(name).level for name in QUIET_LOGGERS}
    yield root
    for name, level in saved_quiet.items():
        logging.getLogger(name).setLevel(level)
    for handler in list(root.handlers):
        if handler not in saved_handlers:
            root.removeHandler(handler)
    root.setLevel(saved_level)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level_and_format_come_from_settings(self, root_logger):
        """The handler should use the configured format and level."""
        settings = LoggingSettings(_env_file=None, level="debug", format="%(levelname)s|%(message)s")

        handler = configure_logging(settings, force=True)

        assert root_logger.level == logging.DEBUG
        assert handler in root_logger.handlers
        record = logging.LogRecord("account_client", logging.INFO, __file__, 1, "hello", None, None)
        assert handler.format(record) == "INFO|hello"

    def test_settings_read_from_environment(self, root_logger, monkeypatch):
        """Environment variables are read when no settings are passed."""
        monkeypatch.setenv("ACCOUNTS_LOG_LEVEL", "error")

        configure_logging(force=True)

        assert root_logger.level == logging.ERROR

    def test_http_loggers_stay_at_warning(self, root_logger):
        """httpx and httpcore request logs stay hidden even at DEBUG."""
        configure_logging(LoggingSettings(_env_file=None, level="DEBUG"), force=True)

        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_http_loggers_follow_stricter_level(self, root_logger):
        configure_logging(LoggingSettings(_env_file=None, level="CRITICAL"), force=True)

        assert logging.getLogger("httpcore").level == logging.CRITICAL

    def test_unknown_level_falls_back_to_info(self, root_logger):
        """A typo in the level name should not abort startup."""
        settings = LoggingSettings(_env_file=None, level="verbose")

        configure_logging(settings, force=True)

        assert settings.level_number == logging.INFO
        assert root_logger.level == logging.INFO

    def test_repeated_calls_reuse_handler(self, root_logger):
        first = configure_logging(LoggingSettings(_env_file=None), force=True)
        count = len(root_logger.handlers)

        assert configure_logging() is first
        assert len(root_logger.handlers) == count

    def test_force_replaces_handler(self, root_logger):
        first = configure_logging(LoggingSettings(_env_file=None), force=True)
        second = configure_logging(LoggingSettings(_env_file=None), force=True)

        assert second is not first
        assert first not in root_logger.handlers
        assert second in root_logger.handlers
