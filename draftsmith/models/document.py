"""
Document domain models and schemas.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DocumentResponse(BaseModel):
    """Response schema for a stored document."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    media_type: str
    storage_locator: str
    created_at: datetime
    chunk_count: int = 0


class DocumentListResponse(BaseModel):
    """Document list response, newest first."""

    documents: list[DocumentResponse]
    total: int


class DocumentUploadResponse(BaseModel):
    """Result of ingesting one upload."""

    document_id: uuid.UUID
    name: str
    extracted_chars: int
    chunks_stored: int = Field(description="Chunks persisted, with or without a vector")
    chunks_embedded: int = Field(description="Chunks persisted with a vector")
    processing_time_ms: float
