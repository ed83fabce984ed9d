"""
Ingestion pipeline configuration settings.

Chunk window geometry, the minimum text length worth indexing, and the
embedding model used for chunk vectors.

Dependencies: pydantic, pydantic_settings
System role: Upload ingestion configuration
"""

from pydantic import Field, model_validator

from draftsmith.configs.base import BaseSettings, settings_config


class IngestionSettings(BaseSettings):
    """Settings for the extract -> chunk -> embed -> persist pipeline."""

    model_config = settings_config("INGESTION_")

    chunk_size: int = Field(default=500, gt=0, description="Window size in characters")
    chunk_overlap: int = Field(
        default=100,
        ge=0,
        description="Characters shared between consecutive windows",
    )
    min_indexable_chars: int = Field(
        default=50,
        description="Extracted text must be longer than this to be chunked and embedded",
    )

    embedding_model: str = Field(
        default="models/text-embedding-004",
        description="Google embedding model ID",
    )
    embedding_dimension: int = Field(
        default=768,
        description="Fixed dimensionality of every stored chunk vector",
    )
    embedding_concurrency: int = Field(
        default=8,
        gt=0,
        description="Maximum in-flight embedding calls per document",
    )

    @model_validator(mode="after")
    def _overlap_below_size(self) -> "IngestionSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        return self
