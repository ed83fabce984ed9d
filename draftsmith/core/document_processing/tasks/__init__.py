"""
Document processing pipeline tasks.

Exports: ExtractionTask, ChunkingTask, EmbeddingTask, chunk_text
"""

from .chunking_task import ChunkingTask, chunk_text
from .embedding_task import EmbeddingTask
from .extraction_task import SUPPORTED_MEDIA_TYPES, ExtractionTask

__all__ = [
    "ChunkingTask",
    "EmbeddingTask",
    "ExtractionTask",
    "SUPPORTED_MEDIA_TYPES",
    "chunk_text",
]
