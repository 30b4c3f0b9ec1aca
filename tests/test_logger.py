"""Tests for the leveled logger and the error logging helpers."""

import sys
from unittest.mock import Mock

import pytest

from agent_watch.utils import error_handling
from agent_watch.utils.logger import Logger, LogLevel


@pytest.fixture
def file_logger(tmp_path):
    """A logger writing only to a fresh file."""
    logger = Logger()
    logger.set_level(LogLevel.INFO)
    logger.set_console_output(False)
    path = tmp_path / "agent_watch.log"
    assert logger.set_file_output(path, append=False)
    yield logger, path
    logger.close()


class TestLogger:
    """Test level filtering and formatting."""

    def test_writes_formatted_line(self, file_logger):
        logger, path = file_logger
        logger.info("source loaded", "session.log")
        text = path.read_text(encoding="utf-8")
        assert "[INFO    ] source loaded session.log" in text

    def test_level_filtering(self, file_logger):
        """Test messages below the level are dropped."""
        logger, path = file_logger
        logger.set_level(LogLevel.WARN)
        logger.debug("hidden")
        logger.info("also hidden")
        logger.warning("shown")
        text = path.read_text(encoding="utf-8")
        assert "hidden" not in text
        assert "[WARN    ] shown" in text
        assert logger.level is LogLevel.WARN

    def test_extra_and_exception(self, file_logger):
        """Test extra fields and tracebacks are appended."""
        logger, path = file_logger
        try:
            raise ValueError("bad payload")
        except ValueError:
            logger.error("decode failed", extra={"row": 3}, exc_info=sys.exc_info())
        text = path.read_text(encoding="utf-8")
        assert "decode failed | {'row': 3}" in text
        assert "ValueError: bad payload" in text

    def test_call_shorthand(self, file_logger):
        """Test calling the logger logs at INFO."""
        logger, path = file_logger
        logger("hello", "world", sep="-")
        assert "[INFO    ] hello-world" in path.read_text(encoding="utf-8")

    def test_console_output_disabled(self, capsys):
        """Test nothing reaches stderr while the TUI owns the terminal."""
        logger = Logger()
        logger.set_level(LogLevel.INFO)
        logger.set_console_output(False)
        logger.error("quiet")
        assert capsys.readouterr().err == ""

    def test_console_output_enabled(self, capsys):
        logger = Logger()
        logger.set_level(LogLevel.INFO)
        logger.set_console_output(True)
        logger.warn("loud")
        assert "loud" in capsys.readouterr().err

    def test_log_level_from_env(self):
        """Test LOG_LEVEL selects the minimum level."""
        assert Logger(env={"LOG_LEVEL": "debug"}).level is LogLevel.DEBUG
        assert Logger(env={"LOG_LEVEL": "warning"}).level is LogLevel.WARN
        assert Logger(env={"LOG_LEVEL": "verbose"}).level is LogLevel.INFO

    def test_exception_includes_traceback(self, file_logger):
        logger, path = file_logger
        try:
            {}["missing"]
        except KeyError:
            logger.exception("lookup failed")
        text = path.read_text(encoding="utf-8")
        assert "[ERROR   ] lookup failed" in text
        assert "KeyError" in text

    def test_unwritable_log_file_is_ignored(self, tmp_path):
        """Test a bad log path leaves file output disabled."""
        logger = Logger()
        logger.set_console_output(False)
        assert not logger.set_file_output(tmp_path / "missing" / "dir" / "log.txt")
        assert logger.file_path is None
        logger.error("still fine")


class TestErrorHelpers:
    """Test the standardized error messages."""

    @pytest.fixture
    def error_log(self, monkeypatch):
        mock = Mock()
        monkeypatch.setattr(error_handling.log, "error", mock)
        return mock

    def test_file_error(self, error_log):
        error_handling.log_file_error("/tmp/x.log", "reading", FileNotFoundError("gone"))
        error_log.assert_called_once_with("[IO] Failed reading /tmp/x.log: FileNotFoundError: gone")

    def test_ui_error(self, error_log):
        error_handling.log_ui_error("transcript view", "copying selection", OSError("no clipboard"))
        error_log.assert_called_once_with(
            "[UI] Failed copying selection on transcript view: OSError: no clipboard"
        )

    def test_watchdog_error(self, error_log):
        error_handling.log_watchdog_error("/tmp", "starting observer", OSError("limit"))
        error_log.assert_called_once_with("[WATCHDOG] Failed starting observer for /tmp: OSError: limit")

    def test_generic_error_prefix(self, error_log):
        error_handling.log_generic_error("source loader", "parsing", ValueError("x"), prefix="LOAD")
        error_log.assert_called_once_with("[LOAD] Error in source loader during parsing: ValueError: x")
