"""
Vector boundary layer.

Provides the embedding client wrapper and the FAISS chunk index.

Dependencies: faiss-cpu, langchain_google_genai
System role: Vector adapter for context retrieval
"""

from draftsmith.boundary.vdb.vector_schemas import ChunkHit, VectorQuery

__all__ = ["ChunkHit", "VectorQuery"]
