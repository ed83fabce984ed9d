"""
Test suite for DocumentPipeline.

Runs extract -> chunk -> embed -> persist against an in-memory database
with a doubled embeddings client.

System role: Verification of ingestion degrade behaviour
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import select

from draftsmith.boundary.db.models import DocumentChunkModel, DocumentModel
from draftsmith.configs.ingestion import IngestionSettings
from draftsmith.core.document_processing import DocumentPipeline
from draftsmith.core.document_processing.tasks import EmbeddingTask, chunk_text

USER = "user-1"


@pytest.fixture
def ingestion_settings() -> IngestionSettings:
    return IngestionSettings(chunk_size=100, chunk_overlap=20, min_indexable_chars=50)


@pytest.fixture
def pipeline(ingestion_settings: IngestionSettings, mock_embeddings: MagicMock) -> DocumentPipeline:
    return DocumentPipeline(ingestion_settings, EmbeddingTask(mock_embeddings, dimension=4))


async def stored_chunks(session, document_id) -> list[DocumentChunkModel]:
    result = await session.execute(
        select(DocumentChunkModel)
        .where(DocumentChunkModel.document_id == document_id)
        .order_by(DocumentChunkModel.position)
    )
    return list(result.scalars().all())


class TestDocumentPipeline:
    """Test suite for DocumentPipeline.process."""

    @pytest.mark.asyncio
    async def test_embedding_outage_keeps_every_chunk(
        self,
        pipeline: DocumentPipeline,
        mock_embeddings: MagicMock,
        test_async_db,
    ) -> None:
        """Test a failing embedding provider persists all chunks with empty vectors."""
        # Arrange
        mock_embeddings.aembed_query.side_effect = RuntimeError("RESOURCE_EXHAUSTED")
        text = " ".join(f"word{i}" for i in range(80))

        # Act
        result = await pipeline.process(
            test_async_db, USER, "cv.txt", "text/plain", "uploads/cv.txt", text.encode()
        )

        # Assert
        chunks = await stored_chunks(test_async_db, result.document_id)
        expected = chunk_text(text, 100, 20)
        assert result.chunk_count == len(expected) == len(chunks)
        assert [c.text for c in chunks] == expected
        assert all(c.embedding == [] for c in chunks)
        assert result.embedded_count == 0
        assert result.degraded is True

    @pytest.mark.asyncio
    async def test_successful_embedding_stores_vectors(
        self, pipeline: DocumentPipeline, test_async_db
    ) -> None:
        # Act
        result = await pipeline.process(
            test_async_db, USER, "cv.txt", "text/plain", "uploads/cv.txt", ("x" * 150).encode()
        )

        # Assert
        chunks = await stored_chunks(test_async_db, result.document_id)
        assert [c.position for c in chunks] == [0, 1]
        assert all(c.embedding == [0.1, 0.2, 0.3, 0.4] for c in chunks)
        assert result.degraded is False

    @pytest.mark.asyncio
    async def test_short_text_is_stored_without_chunks(
        self, pipeline: DocumentPipeline, mock_embeddings: MagicMock, test_async_db
    ) -> None:
        """Test text at or below the indexing threshold skips chunking and embedding."""
        # Arrange
        text = "a" * 50

        # Act
        result = await pipeline.process(
            test_async_db, USER, "note.txt", "text/plain", "uploads/note.txt", text.encode()
        )

        # Assert
        document = await test_async_db.get(DocumentModel, result.document_id)
        assert document is not None
        assert result.chunk_count == 0
        assert await stored_chunks(test_async_db, result.document_id) == []
        mock_embeddings.aembed_query.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unsupported_upload_is_still_persisted(
        self, pipeline: DocumentPipeline, test_async_db
    ) -> None:
        """Test an image upload is stored with an empty chunk sequence."""
        # Act
        result = await pipeline.process(
            test_async_db, USER, "photo.png", "image/png", "uploads/photo.png", b"\x89PNG\r\n"
        )

        # Assert
        document = await test_async_db.get(DocumentModel, result.document_id)
        assert document.storage_locator == "uploads/photo.png"
        assert document.user_id == USER
        assert result.extracted_chars == 0
        assert result.chunk_count == 0
