"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from draftsmith.configs.base import BaseSettings
from draftsmith.configs.compiler import CompilerSettings
from draftsmith.configs.database import DatabaseSettings
from draftsmith.configs.ingestion import IngestionSettings
from draftsmith.configs.llm import LLMSettings
from draftsmith.configs.retrieval import RetrievalSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    compiler: CompilerSettings = Field(default_factory=CompilerSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are loaded once; an invalid chunk geometry
    (overlap >= size) fails here, at startup.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
