"""
Unit tests for utils.logging

Tests JSON and console formatting, root logger setup, context logging
and environment-based configuration.
"""

import json
import logging
import os
import sys
from unittest.mock import patch

from utils.logging import (
    ConsoleFormatter,
    ContextLogger,
    JSONFormatter,
    configure_from_env,
    setup_logging,
    shutdown_logging,
)


def _record(msg="Test message", level=logging.INFO, **extra):
    record = logging.LogRecord(
        name="overrides.apply",
        level=level,
        pathname="/path/to/apply.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Test JSONFormatter class"""

    def test_init_with_defaults(self):
        """Test initialization with default parameters"""
        formatter = JSONFormatter()

        assert formatter.include_timestamp is True
        assert formatter.include_hostname is True
        assert formatter.app_name == "table-overrides"
        assert formatter.hostname is not None

    def test_format_basic_log_record(self):
        """Test formatting a basic log record"""
        # Arrange
        formatter = JSONFormatter()

        # Act
        data = json.loads(formatter.format(_record()))

        # Assert
        assert data["level"] == "INFO"
        assert data["logger"] == "overrides.apply"
        assert data["message"] == "Test message"
        assert data["app"] == "table-overrides"
        assert "timestamp" in data
        assert data["source"] == {"file": "/path/to/apply.py", "line": 42, "function": None}
        assert "context" not in data

    def test_format_without_timestamp_and_hostname(self):
        """Test disabling optional fields"""
        formatter = JSONFormatter(include_timestamp=False, include_hostname=False)

        data = json.loads(formatter.format(_record()))

        assert "timestamp" not in data
        assert "hostname" not in data
        assert formatter.hostname is None

    def test_format_with_extra_context(self):
        """Test extra fields are grouped under context"""
        formatter = JSONFormatter()

        data = json.loads(formatter.format(_record(table_name="rhnerrata", effects=["pinned_index"])))

        assert data["context"] == {"table_name": "rhnerrata", "effects": ["pinned_index"]}

    def test_format_with_exception_info(self):
        """Test exception details are included"""
        # Arrange
        formatter = JSONFormatter()
        try:
            raise ValueError("bad rule")
        except ValueError:
            exc_info = sys.exc_info()
        record = _record(level=logging.ERROR)
        record.exc_info = exc_info

        # Act
        data = json.loads(formatter.format(record))

        # Assert
        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "bad rule"
        assert any("ValueError" in line for line in data["exception"]["traceback"])


class TestConsoleFormatter:
    """Test ConsoleFormatter class"""

    def test_format_without_colors(self):
        """Test plain formatting"""
        formatter = ConsoleFormatter(use_colors=False)

        result = formatter.format(_record("Applied override"))

        assert "[INFO] overrides.apply: Applied override" in result

    def test_format_with_extra_context(self):
        """Test extra fields appended in brackets"""
        formatter = ConsoleFormatter(use_colors=False)

        result = formatter.format(_record(table_name="rhnpackage"))

        assert result.endswith("[table_name=rhnpackage]")

    @patch("sys.stderr.isatty", return_value=True)
    def test_format_with_colors_enabled(self, mock_isatty):
        """Test colored level names"""
        formatter = ConsoleFormatter(use_colors=True)
        record = _record(level=logging.WARNING)
        record.levelname = "WARNING"

        result = formatter.format(record)

        assert "\033[33mWARNING\033[0m" in result

    @patch("sys.stderr.isatty", return_value=True)
    def test_colors_do_not_leak_into_record(self, mock_isatty):
        """Test the shared record keeps its plain level name"""
        formatter = ConsoleFormatter(use_colors=True)
        record = _record()

        formatter.format(record)

        assert record.levelname == "INFO"

    @patch("sys.stderr.isatty", return_value=False)
    def test_colors_disabled_without_tty(self, mock_isatty):
        """Test colors are off when stderr is not a terminal"""
        assert ConsoleFormatter(use_colors=True).use_colors is False


class TestSetupLogging:
    """Test setup_logging function"""

    def teardown_method(self):
        """Clean up logging handlers after each test"""
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            handler.close()
        root_logger.handlers.clear()
        root_logger.setLevel(logging.WARNING)

    def test_setup_logging_with_defaults(self):
        """Test setup with default parameters"""
        setup_logging()

        root_logger = logging.getLogger()
        assert root_logger.level == logging.INFO
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0].formatter, ConsoleFormatter)

    def test_setup_logging_with_invalid_level_defaults_to_info(self):
        """Test unknown level names fall back to INFO"""
        setup_logging(level="VERBOSE")

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_with_json_format(self):
        """Test JSON formatter on console"""
        setup_logging(json_format=True, app_name="sync-run")

        formatter = logging.getLogger().handlers[0].formatter
        assert isinstance(formatter, JSONFormatter)
        assert formatter.app_name == "sync-run"

    def test_setup_logging_with_file(self, tmp_path):
        """Test file handler creation, including missing directories"""
        # Arrange
        log_file = tmp_path / "logs" / "overrides.log"

        # Act
        setup_logging(level="DEBUG", log_file=str(log_file), console_output=False)
        logging.getLogger("overrides.apply").debug("written to file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        # Assert
        assert log_file.exists()
        assert "written to file" in log_file.read_text()

    def test_setup_logging_clears_existing_handlers(self):
        """Test repeated setup does not duplicate handlers"""
        setup_logging()
        setup_logging()

        assert len(logging.getLogger().handlers) == 1

    def test_exporter_loggers_quieted(self):
        """Test tracing exporter loggers are raised to WARNING"""
        setup_logging(level="DEBUG")

        assert logging.getLogger("opentelemetry").level == logging.WARNING
        assert logging.getLogger("grpc").level == logging.WARNING

    @patch("logging.shutdown")
    def test_shutdown_logging_removes_handlers(self, mock_shutdown, tmp_path):
        """Test shutdown closes and removes handlers"""
        setup_logging(log_file=str(tmp_path / "x.log"))

        shutdown_logging()

        assert logging.getLogger().handlers == []
        mock_shutdown.assert_called_once()


class TestContextLogger:
    """Test ContextLogger class"""

    def test_init_with_context(self):
        """Test context stored at construction"""
        logger = ContextLogger("overrides", table_name="rhnerrata")

        assert logger.logger.name == "overrides"
        assert logger.get_context() == {"table_name": "rhnerrata"}

    @patch("logging.Logger.log")
    def test_warning_adds_context(self, mock_log):
        """Test context merged into extra"""
        logger = ContextLogger("overrides", table_name="rhnerrata")

        logger.warning("Pinned index missing", index="rhn_errata_adv_org_uq")

        mock_log.assert_called_once_with(
            logging.WARNING,
            "Pinned index missing",
            exc_info=None,
            extra={"table_name": "rhnerrata", "index": "rhn_errata_adv_org_uq"},
        )

    @patch("logging.Logger.log")
    def test_error_with_exc_info(self, mock_log):
        """Test exc_info passed through"""
        logger = ContextLogger("overrides")

        logger.error("Override failed", exc_info=True)

        assert mock_log.call_args.kwargs["exc_info"] is True

    def test_update_context_overwrites_existing(self):
        """Test update_context replaces values"""
        logger = ContextLogger("overrides", table_name="a")

        logger.update_context(table_name="b", effects="pk_sequence")

        assert logger.get_context() == {"table_name": "b", "effects": "pk_sequence"}

    def test_get_context_returns_copy(self):
        """Test returned context is detached"""
        logger = ContextLogger("overrides", table_name="a")

        logger.get_context()["table_name"] = "changed"

        assert logger.get_context() == {"table_name": "a"}


class TestConfigureFromEnv:
    """Test configure_from_env function"""

    @patch("utils.logging.config.setup_logging")
    @patch.dict(os.environ, {}, clear=True)
    def test_configure_from_env_with_defaults(self, mock_setup):
        """Test defaults when no variables are set"""
        configure_from_env()

        mock_setup.assert_called_once_with(
            level="INFO",
            log_file=None,
            console_output=True,
            json_format=False,
            app_name="table-overrides",
        )

    @patch("utils.logging.config.setup_logging")
    @patch.dict(os.environ, {
        "LOG_LEVEL": "DEBUG",
        "LOG_FILE": "/var/log/sync/overrides.log",
        "LOG_JSON": "yes",
        "LOG_CONSOLE": "0",
        "LOG_APP_NAME": "sync-run",
    }, clear=True)
    def test_configure_from_env_all_vars_set(self, mock_setup):
        """Test every variable is honored"""
        configure_from_env()

        mock_setup.assert_called_once_with(
            level="DEBUG",
            log_file="/var/log/sync/overrides.log",
            console_output=False,
            json_format=True,
            app_name="sync-run",
        )
