"""Tests for logging configuration and setup."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from typescripter.logging import (
    ENVIRONMENT_VARIABLE,
    LoggingError,
    apply_level_override,
    get_config_path,
    load_config,
    setup_logging,
)

# =============================================================================
# Configuration Loading
# =============================================================================


class TestLoggingConfiguration:
    """Test logging configuration lookup and loading."""

    def test_get_config_path_default(self) -> None:
        """Test that the bundled default configuration is found."""
        with patch.dict("os.environ", {}, clear=True):
            config_path = get_config_path()

        assert config_path.name == "logging.yaml"
        assert config_path.exists()

    @pytest.mark.parametrize("environment", ["dev", "test", "prod", "production"])
    def test_get_config_path_falls_back_to_default(self, environment: str) -> None:
        """Test that environments without their own file use logging.yaml."""
        with patch.dict("os.environ", {ENVIRONMENT_VARIABLE: environment}):
            config_path = get_config_path()

        assert config_path.name == "logging.yaml"

    def test_get_config_path_missing_directory_raises_error(self) -> None:
        """Test that a missing configuration raises LoggingError."""
        with (
            patch("typescripter.logging.get_config_dir", return_value=Path("/nonexistent")),
            pytest.raises(LoggingError, match="No logging configuration found"),
        ):
            get_config_path()

    def test_load_config_valid_yaml(self) -> None:
        """Test loading the bundled configuration."""
        config = load_config(get_config_path())

        assert config["version"] == 1
        assert "console" in config["handlers"]
        assert config["loggers"]["typescripter"]["level"] == "INFO"

    def test_load_config_invalid_yaml_raises_error(self, tmp_path: Path) -> None:
        """Test that invalid YAML raises LoggingError."""
        path = tmp_path / "logging.yaml"
        path.write_text("invalid: yaml: content: [", encoding="utf-8")

        with pytest.raises(LoggingError, match="Failed to parse YAML config"):
            load_config(path)

    def test_load_config_nonexistent_file_raises_error(self) -> None:
        """Test that a nonexistent file raises LoggingError."""
        with pytest.raises(LoggingError, match="Failed to read config file"):
            load_config(Path("/nonexistent/config.yaml"))


# =============================================================================
# Level Overrides
# =============================================================================


class TestApplyLevelOverride:
    """Test level override handling."""

    def test_override_updates_loggers_and_root(self) -> None:
        """Test that every logger and the root take the override level."""
        config = {
            "handlers": {"console": {"level": "INFO"}},
            "loggers": {"typescripter": {"level": "INFO"}},
            "root": {"level": "WARNING"},
        }

        apply_level_override(config, "debug")

        assert config["loggers"]["typescripter"]["level"] == "DEBUG"
        assert config["root"]["level"] == "DEBUG"
        assert config["handlers"]["console"]["level"] == "DEBUG"

    def test_override_never_raises_handler_level(self) -> None:
        """Test that handlers are only ever made more verbose."""
        config = {
            "handlers": {"console": {"level": "DEBUG"}},
            "loggers": {"typescripter": {"level": "INFO"}},
        }

        apply_level_override(config, "ERROR")

        assert config["loggers"]["typescripter"]["level"] == "ERROR"
        assert config["handlers"]["console"]["level"] == "DEBUG"

    def test_invalid_level_raises_error(self) -> None:
        """Test that unknown level names raise LoggingError."""
        with pytest.raises(LoggingError, match="Invalid log level"):
            apply_level_override({}, "LOUD")


# =============================================================================
# Logging Setup
# =============================================================================


class TestLoggingSetup:
    """Test logging setup and fallback behaviour."""

    def test_setup_logging_applies_level_override(self) -> None:
        """Test that the package logger receives the override level."""
        setup_logging(level="DEBUG")

        assert logging.getLogger("typescripter").level == logging.DEBUG

    def test_setup_logging_from_custom_file(self, tmp_path: Path) -> None:
        """Test configuring logging from an explicit file path."""
        path = tmp_path / "logging.yaml"
        path.write_text(
            "version: 1\n"
            "disable_existing_loggers: false\n"
            "loggers:\n"
            "  typescripter:\n"
            "    level: WARNING\n",
            encoding="utf-8",
        )

        setup_logging(config_path=str(path))

        assert logging.getLogger("typescripter").level == logging.WARNING

    def test_setup_logging_falls_back_to_basic(self, tmp_path: Path) -> None:
        """Test that a broken configuration falls back to basic logging."""
        with patch("typescripter.logging._setup_basic_logging") as mock_basic:
            setup_logging(config_path=tmp_path / "missing.yaml", level="ERROR")

        mock_basic.assert_called_once_with("ERROR")

    def test_setup_logging_force_basic(self) -> None:
        """Test that force_basic skips file configuration."""
        with (
            patch("typescripter.logging._setup_basic_logging") as mock_basic,
            patch("typescripter.logging.load_config") as mock_load,
        ):
            setup_logging(force_basic=True)

        mock_basic.assert_called_once_with("INFO")
        mock_load.assert_not_called()
