"""Tests for refitgen logging configuration."""

import logging
from pathlib import Path

import pytest
import yaml

from refitgen.logging import (
    LoggingError,
    apply_level_override,
    get_config_path,
    load_config,
    setup_logging,
)


class TestLoggingConfiguration:
    """Test logging configuration loading."""

    def test_packaged_config_exists(self) -> None:
        """Test that the default configuration ships with the package."""
        config_path = get_config_path()

        assert config_path.exists()
        assert config_path.name == "logging.yaml"

    def test_packaged_config_is_valid(self) -> None:
        """Test that the packaged configuration loads as a dictConfig mapping."""
        config = load_config(get_config_path())

        assert config["version"] == 1
        assert "refitgen" in config["loggers"]

    def test_load_invalid_yaml(self, tmp_path: Path) -> None:
        """Test that malformed YAML raises LoggingError."""
        config_path = tmp_path / "logging.yaml"
        config_path.write_text("handlers: [unclosed\n")

        with pytest.raises(LoggingError, match="Failed to parse YAML config"):
            load_config(config_path)

    def test_load_non_mapping(self, tmp_path: Path) -> None:
        """Test that a non-mapping root raises LoggingError."""
        config_path = tmp_path / "logging.yaml"
        config_path.write_text("- one\n")

        with pytest.raises(LoggingError, match="Invalid configuration format"):
            load_config(config_path)

    def test_load_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file raises LoggingError."""
        with pytest.raises(LoggingError, match="Failed to read config file"):
            load_config(tmp_path / "absent.yaml")


class TestApplyLevelOverride:
    """Test log level overrides."""

    def test_lowers_levels(self) -> None:
        """Test that loggers, root and handlers move to a lower level."""
        config = load_config(get_config_path())

        config = apply_level_override(config, "debug")

        assert config["loggers"]["refitgen"]["level"] == "DEBUG"
        assert config["root"]["level"] == "DEBUG"
        assert config["handlers"]["console"]["level"] == "DEBUG"

    def test_does_not_raise_handler_levels(self) -> None:
        """Test that handler levels are never raised by an override."""
        config = load_config(get_config_path())

        config = apply_level_override(config, "ERROR")

        assert config["loggers"]["refitgen"]["level"] == "ERROR"
        assert config["handlers"]["console"]["level"] == "INFO"

    def test_rejects_unknown_level(self) -> None:
        """Test that invalid level names raise LoggingError."""
        with pytest.raises(LoggingError, match="Invalid log level"):
            apply_level_override({}, "LOUD")


class TestSetupLogging:
    """Test logging setup."""

    def test_setup_with_packaged_config(self) -> None:
        """Test that the packaged configuration is applied."""
        setup_logging(level="WARNING")

        logger = logging.getLogger("refitgen")
        assert logger.level == logging.WARNING
        assert logger.propagate is False
        assert logger.handlers

    def test_setup_with_custom_config(self, tmp_path: Path) -> None:
        """Test that a custom configuration path is honoured."""
        config = {
            "version": 1,
            "disable_existing_loggers": False,
            "loggers": {"refitgen": {"level": "ERROR"}},
        }
        config_path = tmp_path / "logging.yaml"
        config_path.write_text(yaml.safe_dump(config))

        setup_logging(config_path=str(config_path))

        assert logging.getLogger("refitgen").level == logging.ERROR

    def test_falls_back_to_basic_logging(self, tmp_path: Path) -> None:
        """Test that an unusable configuration falls back to basic logging."""
        setup_logging(config_path=tmp_path / "absent.yaml", level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_force_basic(self) -> None:
        """Test forced basic console logging."""
        setup_logging(force_basic=True, level="ERROR")

        assert logging.getLogger().level == logging.ERROR
