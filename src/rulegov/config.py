"""Configuration management for rulegov using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILE_NAME = ".rulegov.json"


class OutputFormat(str, Enum):
    """Output format types."""
    TABLE = "table"
    JSON = "json"
    MARKDOWN = "markdown"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class EvaluatorConfig(BaseModel):
    """Rule evaluator binding configuration section."""
    command: list[str] = Field(default_factory=lambda: ["spectral"])
    extra_args: list[str] = Field(alias="extraArgs", default_factory=list)
    timeout: float | None = None  # Seconds; None waits indefinitely

    @field_validator("command")
    @classmethod
    def validate_command(cls, v):
        if not v:
            raise ValueError("evaluator command must not be empty")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError(f"timeout must be > 0, got: {v}")
        return v

    model_config = ConfigDict(populate_by_name=True)


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: OutputFormat = OutputFormat.TABLE

    model_config = ConfigDict(use_enum_values=True, validate_default=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True, validate_default=True)


class RulegovConfig(BaseModel):
    """Complete rulegov configuration model."""
    evaluator: EvaluatorConfig = Field(default_factory=EvaluatorConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> RulegovConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .rulegov.json

    Returns:
        RulegovConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ValueError(f"Invalid configuration in {config_path}: expected a JSON object")

        try:
            return RulegovConfig(**config_data)
        except ValidationError as e:
            raise ValueError(f"Invalid configuration in {config_path}: {e}") from e
    else:
        return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .rulegov.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> RulegovConfig:
    """Create default configuration (Spectral on PATH, table output)."""
    return RulegovConfig()
