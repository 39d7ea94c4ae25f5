"""Tests for environment configuration."""

import logging
from pathlib import Path

import pytest

from nlcron.config import ConfigError, NlcronConfig, configure_logging


class TestNlcronConfig:
    """Tests for NlcronConfig.from_env."""

    def test_defaults(self):
        """Test an empty environment."""
        config = NlcronConfig.from_env({})
        assert config.no_color is False
        assert config.log_level == "WARNING"
        assert config.crontab is None
        assert config.user == "user"
        assert config.home == Path(".")

    @pytest.mark.parametrize("value", ["1", "true", "YES", "on"])
    def test_nlcron_no_color(self, value):
        """Test truthy NLCRON_NO_COLOR values."""
        assert NlcronConfig.from_env({"NLCRON_NO_COLOR": value}).no_color

    def test_nlcron_no_color_false(self):
        """Test falsy NLCRON_NO_COLOR values."""
        assert not NlcronConfig.from_env({"NLCRON_NO_COLOR": "0"}).no_color

    def test_no_color_present(self):
        """Test NO_COLOR disables color whatever its value."""
        assert NlcronConfig.from_env({"NO_COLOR": ""}).no_color

    def test_log_level(self):
        """Test log level is normalized to upper case."""
        config = NlcronConfig.from_env({"NLCRON_LOG_LEVEL": " debug "})
        assert config.log_level == "DEBUG"

    def test_invalid_log_level(self):
        """Test unknown log levels are rejected."""
        with pytest.raises(ConfigError, match="LOUD"):
            NlcronConfig.from_env({"NLCRON_LOG_LEVEL": "loud"})

    def test_paths_and_user(self):
        """Test CRONTAB, USER and HOME."""
        config = NlcronConfig.from_env({
            "CRONTAB": "/tmp/cron",
            "USER": "alice",
            "HOME": "/home/alice",
        })
        assert config.crontab == Path("/tmp/cron")
        assert config.user == "alice"
        assert config.home == Path("/home/alice")

    def test_windows_fallbacks(self):
        """Test USERNAME and USERPROFILE are used when USER and HOME are unset."""
        config = NlcronConfig.from_env({"USERNAME": "bob", "USERPROFILE": "C:/Users/bob"})
        assert config.user == "bob"
        assert config.home == Path("C:/Users/bob")

    def test_empty_values_ignored(self):
        """Test empty variables fall through to defaults."""
        config = NlcronConfig.from_env({"CRONTAB": "", "USER": ""})
        assert config.crontab is None
        assert config.user == "user"


class TestConfigureLogging:
    """Tests for logging setup."""

    def test_accepts_level_name(self):
        """Test level names are accepted."""
        configure_logging("INFO")
        configure_logging(logging.DEBUG)
