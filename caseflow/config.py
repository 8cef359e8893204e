"""Configuration loading for the caseflow test engine.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support. Variables are prefixed with ``CASEFLOW_``.
    """

    model_config = SettingsConfigDict(
        env_prefix="CASEFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Scheduling
    parallelize: bool = Field(
        default=False,
        description="Run the cases of a batch concurrently",
    )
    instance_parallelize: bool = Field(
        default=False,
        description="Run the cases of each instance round concurrently",
    )

    # Display configuration
    display_verbose: bool = Field(
        default=False,
        description="List passed cases as well as failed ones",
    )
    display_width: int = Field(
        default=80,
        description="Width of separator lines in terminal output",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("display_width")
    @classmethod
    def validate_display_width(cls, v: int) -> int:
        """Ensure separators stay readable."""
        if v < 20:
            raise ValueError("display_width must be at least 20")
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load engine settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
