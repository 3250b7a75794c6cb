"""Unit tests for logging configuration."""

import json
import logging

import pytest

from app.core.config import get_settings, reload_settings
from app.core.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_external_logging,
    get_logging_configuration,
    setup_logging,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    reload_settings()
    yield
    get_settings.cache_clear()


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLoggingConfiguration:
    """Tests for the generated dictConfig."""

    def test_console_only_without_log_file(self, monkeypatch):
        """Should only use the console handler when no log file is set."""
        monkeypatch.setenv("LOG_FILE_PATH", "")
        reload_settings()

        config = get_logging_configuration()

        assert config["root"]["handlers"] == ["console"]
        assert "file" not in config["handlers"]

    def test_file_handlers_with_log_file(self, monkeypatch, tmp_path):
        """Should add file and error file handlers next to the log file."""
        log_file = tmp_path / "orders.log"
        monkeypatch.setenv("LOG_FILE_PATH", str(log_file))
        reload_settings()

        config = get_logging_configuration()

        assert config["handlers"]["file"]["filename"] == str(log_file)
        assert config["handlers"]["error_file"]["filename"] == str(tmp_path / "orders_errors.log")
        assert "json_file" not in config["handlers"]
        assert config["root"]["handlers"] == ["console", "file", "error_file"]

    def test_json_handler_in_production(self, monkeypatch, tmp_path):
        """Should add the JSON file handler in production."""
        monkeypatch.setenv("LOG_FILE_PATH", str(tmp_path / "orders.log"))
        monkeypatch.setenv("ENVIRONMENT", "production")
        reload_settings()

        config = get_logging_configuration()

        assert config["handlers"]["json_file"]["formatter"] == "json"
        assert "json_file" in config["root"]["handlers"]


class TestStructuredFormatter:
    """Tests for JSON log output."""

    def test_formats_record_as_json(self):
        """Should render message, level and extra fields as JSON."""
        record = logging.LogRecord(
            name="app.services.order_lines",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="Order line rejected: %s",
            args=("INSUFFICIENT_STOCK",),
            exc_info=None,
        )
        record.order_id = 12

        payload = json.loads(StructuredFormatter().format(record))

        assert payload["level"] == "WARNING"
        assert payload["message"] == "Order line rejected: INSUFFICIENT_STOCK"
        assert payload["extra"]["order_id"] == 12


class TestLogContext:
    """Tests for temporary log record fields."""

    def test_adds_and_removes_fields(self, caplog):
        """Should attach context fields only inside the block."""
        logger = logging.getLogger("app.tests.log_context")

        with caplog.at_level(logging.INFO, logger="app.tests.log_context"):
            with LogContext(order_id=5):
                logger.info("inside")
            logger.info("outside")

        inside, outside = caplog.records
        assert inside.order_id == 5
        assert not hasattr(outside, "order_id")


class TestSetupLogging:
    """Tests for applying the configuration."""

    def test_creates_log_directory(self, monkeypatch, tmp_path, restore_root_logger):
        """Should create the parent directory of the log file."""
        log_file = tmp_path / "logs" / "orders.log"
        monkeypatch.setenv("LOG_FILE_PATH", str(log_file))
        reload_settings()

        setup_logging()

        assert log_file.parent.is_dir()

    @pytest.mark.parametrize("echo,expected", [("true", logging.INFO), ("false", logging.WARNING)])
    def test_sqlalchemy_level_follows_echo(self, monkeypatch, echo, expected):
        """Should only show SQL statements when echo is enabled."""
        monkeypatch.setenv("DB_ECHO", echo)
        reload_settings()

        configure_external_logging()

        assert logging.getLogger("sqlalchemy.engine").level == expected
