"""
Retrieval configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Context retrieval configuration
"""

from pydantic import Field

from draftsmith.configs.base import BaseSettings, settings_config


class RetrievalSettings(BaseSettings):
    """Similarity search and recency fallback limits."""

    model_config = settings_config("RETRIEVAL_")

    top_k: int = Field(default=5, ge=1, le=100, description="Number of nearest chunks")
    fallback_document_limit: int = Field(
        default=5,
        ge=1,
        description="Most recent documents used when similarity search is unavailable",
    )
