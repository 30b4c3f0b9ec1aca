from __future__ import annotations

import os
import sys
import traceback
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Any, Mapping, TextIO

# Project-wide logger. Usage:
#   from agent_watch.utils.logger import log
#   log.info("loaded", name)
#   log.debug("event", extra={"path": path})
#   log.error("failed", exc_info=sys.exc_info())
# AGENT_WATCH_DEBUG=1 turns on DEBUG and mirrors everything to DEBUG_LOG_PATH.

DEBUG_LOG_PATH = Path("/tmp/agent_watch_debug.log")

LINE_FORMAT = "{timestamp} [{level:8}] {message}"


class LogLevel(IntEnum):
    """Log severity levels."""
    DEBUG = 10
    INFO = 20
    WARN = 30
    WARNING = 30  # Alias for WARN
    ERROR = 40
    CRITICAL = 50


_ANSI_RESET = "\033[0m"
_LEVEL_COLORS = {
    LogLevel.DEBUG: "\033[90m",
    LogLevel.WARN: "\033[93m",
    LogLevel.ERROR: "\033[91m",
    LogLevel.CRITICAL: "\033[95m",
}


class Logger:
    """Leveled logger with a stderr sink and an optional file sink.

    Writing a record never raises: a broken sink is skipped so a logging
    failure cannot take the TUI down.
    """

    def __init__(self, env: Mapping[str, str] | None = None):
        self._level = LogLevel.INFO
        self._console_enabled = True
        self._file: TextIO | None = None
        self._file_path: Path | None = None
        self.configure_from_env(os.environ if env is None else env)

    def configure_from_env(self, env: Mapping[str, str]) -> None:
        if env.get("AGENT_WATCH_DEBUG") == "1":
            self._level = LogLevel.DEBUG
            self.set_file_output(DEBUG_LOG_PATH)

        name = env.get("LOG_LEVEL", "").upper()
        if name in LogLevel.__members__:
            self._level = LogLevel[name]

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def file_path(self) -> Path | None:
        return self._file_path

    def set_level(self, level: LogLevel) -> None:
        self._level = level

    def set_console_output(self, enabled: bool) -> None:
        """Turn the stderr sink on or off (off while the full-screen app runs)."""
        self._console_enabled = enabled

    def set_file_output(self, path: Path, append: bool = True) -> bool:
        """Mirror records to ``path``; returns False if the file cannot be opened."""
        self.close()
        try:
            self._file = open(path, "a" if append else "w", encoding="utf-8")
        except OSError:
            return False
        self._file_path = Path(path)
        return True

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
        self._file = None
        self._file_path = None

    def format_record(
        self,
        level: LogLevel,
        message: str,
        extra: Mapping[str, Any] | None = None,
        exc_info: tuple | None = None,
    ) -> str:
        stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        record = LINE_FORMAT.format(timestamp=stamp, level=level.name, message=message)
        if extra:
            record += f" | {extra}"
        if exc_info and exc_info[0] is not None:
            record += "\n" + "".join(traceback.format_exception(*exc_info))
        return record

    def log(
        self,
        level: LogLevel,
        *args: Any,
        sep: str = " ",
        extra: Mapping[str, Any] | None = None,
        exc_info: tuple | None = None,
    ) -> None:
        if level < self._level:
            return
        record = self.format_record(level, sep.join(str(a) for a in args), extra, exc_info)
        self._to_file(record)
        if self._console_enabled:
            self._to_stderr(level, record)

    def _to_file(self, record: str) -> None:
        if self._file is None:
            return
        try:
            self._file.write(record + "\n")
            self._file.flush()
        except (OSError, ValueError):
            self._file = None

    def _to_stderr(self, level: LogLevel, record: str) -> None:
        stream = sys.stderr
        try:
            if stream.isatty() and level in _LEVEL_COLORS:
                record = f"{_LEVEL_COLORS[level]}{record}{_ANSI_RESET}"
            stream.write(record + "\n")
            stream.flush()
        except (OSError, ValueError, AttributeError):
            return

    def debug(self, *args: Any, **kwargs) -> None:
        self.log(LogLevel.DEBUG, *args, **kwargs)

    def info(self, *args: Any, **kwargs) -> None:
        self.log(LogLevel.INFO, *args, **kwargs)

    def warn(self, *args: Any, **kwargs) -> None:
        self.log(LogLevel.WARN, *args, **kwargs)

    warning = warn

    def error(self, *args: Any, **kwargs) -> None:
        self.log(LogLevel.ERROR, *args, **kwargs)

    def critical(self, *args: Any, **kwargs) -> None:
        self.log(LogLevel.CRITICAL, *args, **kwargs)

    def exception(self, *args: Any, **kwargs) -> None:
        """Log at ERROR with the exception currently being handled."""
        self.log(LogLevel.ERROR, *args, exc_info=sys.exc_info(), **kwargs)

    def __call__(self, *args: Any, sep: str = " ") -> None:
        """Shorthand for info()."""
        self.info(*args, sep=sep)


log = Logger()
