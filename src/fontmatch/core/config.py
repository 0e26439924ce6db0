"""Configuration management for the font selection system."""

import logging
from pathlib import Path

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    ConfigurationError,
    EmptyConfigFileError,
    InvalidYamlError,
)

DEFAULT_FONT_EXTENSIONS = [".ttf", ".otf", ".ttc", ".otc", ".woff", ".woff2", ".dfont", ".pfb"]

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class FontMatchConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FONTMATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    """Font source and selection configuration."""

    # Sources
    font_directories: list[Path] = Field(
        default_factory=list, description="Extra directories scanned before system fonts"
    )
    include_system_fonts: bool = Field(True, description="Query the platform font catalog")
    font_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FONT_EXTENSIONS),
        description="File suffixes treated as font files when walking directories",
    )
    compute_checksums: bool = Field(False, description="Record sha256 checksums for font files")

    # External catalog tools (fc-list, system_profiler)
    command_timeout: float = Field(30.0, gt=0.0, description="Catalog command timeout (s)")

    # Selection
    generic_families: dict[str, str] = Field(
        default_factory=dict,
        description="Overrides for generic family names (serif, sans-serif, ...)",
    )

    log_level: str = Field("INFO", description="Application log level")

    @field_validator("font_extensions")
    @classmethod
    def normalize_extensions(cls, v):
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]

    @field_validator("generic_families")
    @classmethod
    def normalize_generic_families(cls, v):
        return {key.strip().lower(): value for key, value in v.items()}

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(VALID_LOG_LEVELS)}")
        return level

    def configure_logging(self) -> None:
        """Apply the configured log level to the package logger."""
        logging.getLogger("fontmatch").setLevel(self.log_level)

    @classmethod
    def load_from_env(cls, env_file: str | Path | None = ".env") -> "FontMatchConfig":
        """Load configuration from environment variables and .env file."""
        if env_file:
            env_file = Path(env_file)
            if env_file.exists():
                return cls(_env_file=env_file)
        return cls(_env_file=None)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "FontMatchConfig":
        """Load configuration from YAML file."""
        return load_config_from_yaml(config_path, cls)

    @classmethod
    def from_env_and_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = ".env"
    ) -> "FontMatchConfig":
        """Load configuration from YAML when given, else from environment variables."""
        if yaml_path and Path(yaml_path).exists():
            return cls.from_yaml(yaml_path)
        return cls.load_from_env(env_file)


def load_config_from_yaml(config_path: str | Path, config_class: type) -> BaseSettings:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidYamlError(str(config_path), str(e)) from e

    if config_data is None:
        raise EmptyConfigFileError(str(config_path))

    try:
        # YAML-based configs must not pick up a stray .env file
        return config_class(_env_file=None, **config_data)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigLoadError(str(e)) from e
