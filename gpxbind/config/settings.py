"""Configuration management using Pydantic Settings.

This module provides type-safe configuration management with automatic
environment variable loading and validation using Pydantic Settings.

The configuration is organized into logical groups:
- LoggingConfig: Logging levels, files, and debugging options
- XMLConfig: Document framing and streaming settings for the XML wire form
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("gpxbind.log")
    real_time_debug: bool = True


class XMLConfig(BaseModel):
    """GPX document framing and token stream settings."""

    namespace: str = "http://www.topografix.com/GPX/1/1"
    encoding: str = "UTF-8"
    indent: int = Field(default=2, ge=0)  # 0 writes everything on one line
    chunk_size: int = Field(default=64 * 1024, gt=0)


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables can be set using flat naming or nested naming:
    - Flat: CONSOLE_LOG_LEVEL, FILE_LOG_LEVEL, LOG_FILE
    - Nested: LOGGING__CONSOLE_LEVEL, XML__INDENT, XML__ENCODING

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    logging: LoggingConfig = LoggingConfig()
    xml: XMLConfig = XMLConfig()

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Map flat logging environment variables onto the nested structure."""
        if not isinstance(data, dict):
            return data

        log_mapping = {
            "console_log_level": "console_level",
            "file_log_level": "file_level",
            "log_file": "log_file",
            "log_real_time_debug": "real_time_debug",
        }
        for env_key, field_key in log_mapping.items():
            if env_key in data:
                data.setdefault("logging", {})[field_key] = data.pop(env_key)

        return data


# Singleton instance for application use
settings = Settings()
