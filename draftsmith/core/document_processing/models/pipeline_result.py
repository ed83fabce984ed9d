"""
Pipeline result model for document ingestion.

Dependencies: pydantic
System role: Return type for DocumentPipeline.process()
"""

from uuid import UUID

from pydantic import BaseModel, Field


class PipelineResult(BaseModel):
    """Result of document ingestion pipeline execution."""

    document_id: UUID = Field(description="Persisted document identifier")
    extracted_chars: int = Field(description="Length of extracted text")
    chunk_count: int = Field(description="Number of chunks persisted")
    embedded_count: int = Field(description="Chunks persisted with a vector")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")

    @property
    def degraded(self) -> bool:
        """True when at least one chunk was stored without a vector."""
        return self.embedded_count < self.chunk_count
