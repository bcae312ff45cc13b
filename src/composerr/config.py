"""Configuration management for composerr using Pydantic models."""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ComposerrConfig(BaseModel):
    """Library-wide defaults used while building and rendering errors."""
    default_message: str = Field(alias="defaultMessage", default="Unknown error")
    fallback_name: str = Field(alias="fallbackName", default="Error")
    default_level: str = Field(alias="defaultLevel", default="error")
    default_status_code: int = Field(alias="defaultStatusCode", default=500)
    server_error_status_code: int = Field(alias="serverErrorStatusCode", default=503)
    hidden_message: str = Field(alias="hiddenMessage", default="An internal server error occurred")
    logger_name: str = Field(alias="loggerName", default="composerr")

    @field_validator("default_status_code", "server_error_status_code")
    @classmethod
    def validate_status_code(cls, v):
        if not (100 <= v <= 599):
            raise ValueError(f"status code must be between 100-599, got: {v}")
        return v

    @field_validator("default_level", "fallback_name", "logger_name")
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError("value must not be blank")
        return v.strip()

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)


def load_config(config_path: str | Path | None = None) -> ComposerrConfig:
    """Load configuration from a JSON file with fallback to defaults.

    Args:
        config_path: Optional path to a JSON configuration file

    Returns:
        ComposerrConfig: Loaded and validated configuration

    Raises:
        ValueError: If the file holds invalid JSON or invalid settings
    """
    if config_path is None:
        return create_default_config()

    config_path = Path(config_path)
    if not config_path.exists():
        return create_default_config()

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {config_path}: {e}")

    if not isinstance(config_data, dict):
        raise ValueError(f"Config file {config_path} must contain a JSON object")

    try:
        return ComposerrConfig(**config_data)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}")


def create_default_config() -> ComposerrConfig:
    """Create configuration with the documented defaults."""
    return ComposerrConfig()
