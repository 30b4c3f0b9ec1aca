"""Tests for the configuration system."""

import pytest

from agent_watch.utils.config import Config, ConfigError


class TestConfig:
    """Test the Config class functionality."""

    def test_config_defaults(self):
        """Test that config uses correct default values."""
        config = Config()
        assert config.context_lines == 3
        assert config.gap_threshold == 3
        assert config.max_diff_lines == 15
        assert config.sidebar_width == 23
        assert config.min_content_width == 20
        assert config.edge_scroll_margin == 1
        assert config.selection_color == 238
        assert config.tab_size == 8
        assert config.debounce_ms == 300
        assert config.max_render_lines == 5000

    def test_config_environment_variables(self, monkeypatch):
        """Test that environment variables override defaults."""
        monkeypatch.setenv("AGENT_WATCH_CONTEXT_LINES", "5")
        monkeypatch.setenv("AGENT_WATCH_GAP_THRESHOLD", "0")
        monkeypatch.setenv("AGENT_WATCH_MAX_DIFF_LINES", "40")
        monkeypatch.setenv("AGENT_WATCH_SIDEBAR_WIDTH", "30")
        monkeypatch.setenv("AGENT_WATCH_SELECTION_COLOR", "24")
        monkeypatch.setenv("AGENT_WATCH_TAB_SIZE", "4")
        monkeypatch.setenv("AGENT_WATCH_DEBOUNCE_MS", "150")

        config = Config()
        assert config.context_lines == 5
        assert config.gap_threshold == 0
        assert config.max_diff_lines == 40
        assert config.sidebar_width == 30
        assert config.selection_color == 24
        assert config.tab_size == 4
        assert config.debounce_ms == 150

    def test_config_invalid_environment_variables(self, monkeypatch):
        """Test that invalid environment variables fall back to defaults."""
        monkeypatch.setenv("AGENT_WATCH_SIDEBAR_WIDTH", "wide")
        monkeypatch.setenv("AGENT_WATCH_TAB_SIZE", "4.5")

        config = Config()
        assert config.sidebar_width == 23
        assert config.tab_size == 8

    def test_config_out_of_range_environment_variable(self, monkeypatch):
        """Test that a parsable but out-of-range value is rejected."""
        monkeypatch.setenv("AGENT_WATCH_CONTEXT_LINES", "99")
        with pytest.raises(ConfigError, match="context_lines must be between 0 and 10"):
            Config()

    def test_config_validation_bounds(self):
        """Test that configuration values are validated against bounds."""
        with pytest.raises(ConfigError, match="sidebar_width must be between"):
            config = Config()
            config.sidebar_width = 5
            config._validate_all()

        with pytest.raises(ConfigError, match="selection_color must be between"):
            config = Config()
            config.selection_color = 256
            config._validate_all()

    def test_config_validation_types(self):
        """Test that configuration values must be integers."""
        config = Config()
        with pytest.raises(ConfigError, match="tab_size must be an integer"):
            config.tab_size = "8"
            config._validate_all()

        config = Config()
        with pytest.raises(ConfigError, match="edge_scroll_margin must be an integer"):
            config.edge_scroll_margin = True
            config._validate_all()

    def test_config_boundary_values(self, monkeypatch):
        """Test configuration values at boundary limits."""
        monkeypatch.setenv("AGENT_WATCH_CONTEXT_LINES", "0")
        monkeypatch.setenv("AGENT_WATCH_MAX_DIFF_LINES", "1")
        monkeypatch.setenv("AGENT_WATCH_DEBOUNCE_MS", "50")
        monkeypatch.setenv("AGENT_WATCH_MAX_RENDER_LINES", "100")

        config = Config()
        assert config.context_lines == 0
        assert config.max_diff_lines == 1
        assert config.debounce_ms == 50
        assert config.max_render_lines == 100

        monkeypatch.setenv("AGENT_WATCH_CONTEXT_LINES", "10")
        monkeypatch.setenv("AGENT_WATCH_MAX_DIFF_LINES", "1000")
        monkeypatch.setenv("AGENT_WATCH_DEBOUNCE_MS", "2000")
        monkeypatch.setenv("AGENT_WATCH_MAX_RENDER_LINES", "100000")

        config = Config()
        assert config.context_lines == 10
        assert config.max_diff_lines == 1000
        assert config.debounce_ms == 2000
        assert config.max_render_lines == 100000

    def test_config_repr(self):
        """Test the string representation of config."""
        repr_str = repr(Config())

        assert repr_str.startswith("Config(")
        assert "context_lines=3" in repr_str
        assert "sidebar_width=23" in repr_str
        assert "selection_color=238" in repr_str
        assert "max_render_lines=5000" in repr_str

    def test_config_error_inheritance(self):
        """Test that ConfigError is properly defined."""
        assert issubclass(ConfigError, Exception)

        with pytest.raises(ConfigError):
            raise ConfigError("Test error")
