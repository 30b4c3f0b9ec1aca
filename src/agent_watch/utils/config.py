from __future__ import annotations

import os
from typing import Final

from .logger import log


class ConfigError(Exception):
    """Configuration validation error."""

    pass


class Config:
    """Agent Watch configuration with environment variable support and validation."""

    ENV_PREFIX: Final[str] = "AGENT_WATCH_"

    # Default values
    _DEFAULT_CONTEXT_LINES: Final[int] = 3
    _DEFAULT_GAP_THRESHOLD: Final[int] = 3
    _DEFAULT_MAX_DIFF_LINES: Final[int] = 15
    _DEFAULT_SIDEBAR_WIDTH: Final[int] = 23
    _DEFAULT_MIN_CONTENT_WIDTH: Final[int] = 20
    _DEFAULT_EDGE_SCROLL_MARGIN: Final[int] = 1
    _DEFAULT_SELECTION_COLOR: Final[int] = 238
    _DEFAULT_TAB_SIZE: Final[int] = 8
    _DEFAULT_DEBOUNCE_MS: Final[int] = 300
    _DEFAULT_MAX_RENDER_LINES: Final[int] = 5000

    # Validation bounds
    _MIN_CONTEXT_LINES: Final[int] = 0
    _MAX_CONTEXT_LINES: Final[int] = 10
    _MIN_GAP_THRESHOLD: Final[int] = 0
    _MAX_GAP_THRESHOLD: Final[int] = 50
    _MIN_MAX_DIFF_LINES: Final[int] = 1
    _MAX_MAX_DIFF_LINES: Final[int] = 1000
    _MIN_SIDEBAR_WIDTH: Final[int] = 10
    _MAX_SIDEBAR_WIDTH: Final[int] = 80
    _MIN_MIN_CONTENT_WIDTH: Final[int] = 10
    _MAX_MIN_CONTENT_WIDTH: Final[int] = 200
    _MIN_EDGE_SCROLL_MARGIN: Final[int] = 0
    _MAX_EDGE_SCROLL_MARGIN: Final[int] = 5
    _MIN_SELECTION_COLOR: Final[int] = 0
    _MAX_SELECTION_COLOR: Final[int] = 255
    _MIN_TAB_SIZE: Final[int] = 1
    _MAX_TAB_SIZE: Final[int] = 16
    _MIN_DEBOUNCE_MS: Final[int] = 50
    _MAX_DEBOUNCE_MS: Final[int] = 2000
    _MIN_RENDER_LINES: Final[int] = 100
    _MAX_RENDER_LINES: Final[int] = 100000

    def __init__(self):
        """Initialize configuration with environment variable overrides."""
        self.context_lines = self._get_int_env("CONTEXT_LINES", self._DEFAULT_CONTEXT_LINES)
        self.gap_threshold = self._get_int_env("GAP_THRESHOLD", self._DEFAULT_GAP_THRESHOLD)
        self.max_diff_lines = self._get_int_env("MAX_DIFF_LINES", self._DEFAULT_MAX_DIFF_LINES)
        self.sidebar_width = self._get_int_env("SIDEBAR_WIDTH", self._DEFAULT_SIDEBAR_WIDTH)
        self.min_content_width = self._get_int_env("MIN_CONTENT_WIDTH", self._DEFAULT_MIN_CONTENT_WIDTH)
        self.edge_scroll_margin = self._get_int_env("EDGE_SCROLL_MARGIN", self._DEFAULT_EDGE_SCROLL_MARGIN)
        self.selection_color = self._get_int_env("SELECTION_COLOR", self._DEFAULT_SELECTION_COLOR)
        self.tab_size = self._get_int_env("TAB_SIZE", self._DEFAULT_TAB_SIZE)
        self.debounce_ms = self._get_int_env("DEBOUNCE_MS", self._DEFAULT_DEBOUNCE_MS)
        self.max_render_lines = self._get_int_env("MAX_RENDER_LINES", self._DEFAULT_MAX_RENDER_LINES)

        self._validate_all()

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer environment variable with fallback to default."""
        name = f"{self.ENV_PREFIX}{key}"
        value = os.environ.get(name)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError as e:
            log.warning(f"Invalid integer value for {name}='{value}', using default {default}: {e}")
            return default

    def _validate_all(self) -> None:
        """Validate all configuration values."""
        self._validate_int("context_lines", self.context_lines, self._MIN_CONTEXT_LINES, self._MAX_CONTEXT_LINES)
        self._validate_int("gap_threshold", self.gap_threshold, self._MIN_GAP_THRESHOLD, self._MAX_GAP_THRESHOLD)
        self._validate_int(
            "max_diff_lines", self.max_diff_lines, self._MIN_MAX_DIFF_LINES, self._MAX_MAX_DIFF_LINES
        )
        self._validate_int("sidebar_width", self.sidebar_width, self._MIN_SIDEBAR_WIDTH, self._MAX_SIDEBAR_WIDTH)
        self._validate_int(
            "min_content_width", self.min_content_width, self._MIN_MIN_CONTENT_WIDTH, self._MAX_MIN_CONTENT_WIDTH
        )
        self._validate_int(
            "edge_scroll_margin", self.edge_scroll_margin, self._MIN_EDGE_SCROLL_MARGIN, self._MAX_EDGE_SCROLL_MARGIN
        )
        self._validate_int(
            "selection_color", self.selection_color, self._MIN_SELECTION_COLOR, self._MAX_SELECTION_COLOR
        )
        self._validate_int("tab_size", self.tab_size, self._MIN_TAB_SIZE, self._MAX_TAB_SIZE)
        self._validate_int("debounce_ms", self.debounce_ms, self._MIN_DEBOUNCE_MS, self._MAX_DEBOUNCE_MS)
        self._validate_int("max_render_lines", self.max_render_lines, self._MIN_RENDER_LINES, self._MAX_RENDER_LINES)

    def _validate_int(self, name: str, value: int, min_val: int, max_val: int) -> None:
        """Validate integer configuration value."""
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigError(f"{name} must be an integer, got {type(value).__name__}")
        if not (min_val <= value <= max_val):
            raise ConfigError(f"{name} must be between {min_val} and {max_val}, got {value}")

    def __repr__(self) -> str:
        """String representation of configuration."""
        return (
            f"Config(context_lines={self.context_lines}, "
            f"gap_threshold={self.gap_threshold}, "
            f"max_diff_lines={self.max_diff_lines}, "
            f"sidebar_width={self.sidebar_width}, "
            f"min_content_width={self.min_content_width}, "
            f"edge_scroll_margin={self.edge_scroll_margin}, "
            f"selection_color={self.selection_color}, "
            f"tab_size={self.tab_size}, "
            f"debounce_ms={self.debounce_ms}, "
            f"max_render_lines={self.max_render_lines})"
        )


# Global configuration instance
config = Config()
