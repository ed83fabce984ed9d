"""
Database configuration settings.

Persistence is an external collaborator; the default URL points at a local
SQLite file so the service runs without a database server.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field

from draftsmith.configs.base import BaseSettings, settings_config


class DatabaseSettings(BaseSettings):
    """Async SQLAlchemy database configuration."""

    model_config = settings_config("DRAFTSMITH_DB_")

    url: str = Field(
        default="sqlite+aiosqlite:///./draftsmith.db",
        description="Async SQLAlchemy URL (sqlite+aiosqlite or postgresql+asyncpg)",
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")
