"""
Vector search schemas.

Pydantic models for similarity queries and their results.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from uuid import UUID

from pydantic import BaseModel, Field


class VectorQuery(BaseModel):
    """Query parameters for a user-scoped similarity search."""

    user_id: str = Field(description="Only this user's chunks are searched")
    embedding: list[float] = Field(description="Query embedding vector")
    top_k: int = Field(default=5, description="Number of results to return", ge=1, le=100)


class ChunkHit(BaseModel):
    """Single chunk returned by similarity search."""

    document_id: UUID = Field(description="Parent document")
    position: int = Field(description="Chunk index within its document")
    content: str = Field(description="Chunk text")
    distance: float = Field(description="Squared L2 distance to the query (lower is closer)")
