"""
Unit tests for core configuration - Imperative style.

Tests configuration loading, validation, defaults and environment variable support.
"""

import logging
import os
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from fontmatch.core.config import (
    DEFAULT_FONT_EXTENSIONS,
    FontMatchConfig,
    load_config_from_yaml,
)
from fontmatch.core.exceptions import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    ConfigurationError,
    EmptyConfigFileError,
    InvalidYamlError,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from FONTMATCH_* variables and any .env in the working directory."""
    for name in list(os.environ):
        if name.startswith("FONTMATCH_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


class TestFontMatchConfig:
    """Test FontMatchConfig validation."""

    def test_defaults(self):
        config = FontMatchConfig(_env_file=None)

        assert config.font_directories == []
        assert config.include_system_fonts is True
        assert config.font_extensions == DEFAULT_FONT_EXTENSIONS
        assert config.compute_checksums is False
        assert config.command_timeout == 30.0
        assert config.generic_families == {}
        assert config.log_level == "INFO"

    def test_extension_normalization(self):
        config = FontMatchConfig(_env_file=None, font_extensions=["TTF", ".OTF"])

        assert config.font_extensions == [".ttf", ".otf"]

    def test_generic_family_keys_lowercased(self):
        config = FontMatchConfig(_env_file=None, generic_families={" Sans-Serif ": "Inter"})

        assert config.generic_families == {"sans-serif": "Inter"}

    def test_log_level_validation(self):
        assert FontMatchConfig(_env_file=None, log_level="debug").log_level == "DEBUG"

        with pytest.raises(ValidationError):
            FontMatchConfig(_env_file=None, log_level="chatty")

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            FontMatchConfig(_env_file=None, command_timeout=0)

    def test_configure_logging(self):
        config = FontMatchConfig(_env_file=None, log_level="WARNING")

        config.configure_logging()

        assert logging.getLogger("fontmatch").level == logging.WARNING


class TestEnvironmentVariableSupport:
    """Test environment variable support."""

    def test_config_from_env_vars(self, monkeypatch):
        monkeypatch.setenv("FONTMATCH_INCLUDE_SYSTEM_FONTS", "false")
        monkeypatch.setenv("FONTMATCH_FONT_DIRECTORIES", '["/opt/fonts", "/srv/fonts"]')
        monkeypatch.setenv("FONTMATCH_COMMAND_TIMEOUT", "5")

        config = FontMatchConfig.load_from_env(env_file=None)

        assert config.include_system_fonts is False
        assert config.font_directories == [Path("/opt/fonts"), Path("/srv/fonts")]
        assert config.command_timeout == 5.0

    def test_config_from_env_file(self, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("FONTMATCH_COMPUTE_CHECKSUMS=true\nFONTMATCH_LOG_LEVEL=error\n")

        config = FontMatchConfig.load_from_env(env_file=env_file)

        assert config.compute_checksums is True
        assert config.log_level == "ERROR"

    def test_missing_env_file_uses_defaults(self, tmp_path):
        config = FontMatchConfig.load_from_env(env_file=tmp_path / "absent.env")

        assert config.include_system_fonts is True


class TestYamlLoading:
    """Test YAML configuration loading."""

    def test_from_yaml(self, tmp_path):
        config_path = tmp_path / "fontmatch.yaml"
        config_path.write_text(
            yaml.safe_dump(
                {
                    "font_directories": [str(tmp_path / "fonts")],
                    "include_system_fonts": False,
                    "generic_families": {"monospace": "Fira Code"},
                }
            )
        )

        config = FontMatchConfig.from_yaml(config_path)

        assert config.font_directories == [tmp_path / "fonts"]
        assert config.include_system_fonts is False
        assert config.generic_families == {"monospace": "Fira Code"}

    def test_from_env_and_yaml_prefers_yaml(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FONTMATCH_COMMAND_TIMEOUT", "9")
        config_path = tmp_path / "fontmatch.yaml"
        config_path.write_text("command_timeout: 3\n")

        assert FontMatchConfig.from_env_and_yaml(config_path).command_timeout == 3.0
        assert FontMatchConfig.from_env_and_yaml(None, env_file=None).command_timeout == 9.0

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigFileNotFoundError):
            load_config_from_yaml(tmp_path / "missing.yaml", FontMatchConfig)

    def test_empty_file(self, tmp_path):
        config_path = tmp_path / "empty.yaml"
        config_path.write_text("")

        with pytest.raises(EmptyConfigFileError):
            FontMatchConfig.from_yaml(config_path)

    def test_invalid_yaml(self, tmp_path):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("font_directories: [unclosed\n")

        with pytest.raises(InvalidYamlError):
            FontMatchConfig.from_yaml(config_path)

    def test_invalid_values(self, tmp_path):
        config_path = tmp_path / "invalid.yaml"
        config_path.write_text("command_timeout: -1\n")

        with pytest.raises(ConfigLoadError) as exc_info:
            FontMatchConfig.from_yaml(config_path)

        assert isinstance(exc_info.value, ConfigurationError)
