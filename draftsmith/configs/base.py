"""
Base configuration settings.

App-wide settings read from `DRAFTSMITH_*` variables (environment, logging,
HTTP bind and CORS). Per-concern settings subclass this and replace the
prefix with their own.

Dependencies: pydantic, pydantic_settings
System role: Foundation for all configuration classes
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

ENV_FILE = ".env"


def settings_config(env_prefix: str) -> SettingsConfigDict:
    """Shared settings config with a concern-specific variable prefix."""
    return SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        env_prefix=env_prefix,
        case_sensitive=False,
        extra="ignore",
    )


class BaseSettings(PydanticBaseSettings):
    """App-wide settings shared by every config module."""

    model_config = settings_config("DRAFTSMITH_")

    environment: Literal["development", "test", "production"] = Field(
        default="development",
    )
    debug: bool = Field(default=False)
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by CORS; JSON list in the environment",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level
