"""
Test suite for ContextRetriever.

Covers the similarity path and the recency fallback taken when the
similarity path raises for any reason.

System role: Verification of per-request context assembly
"""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from draftsmith.boundary.vdb.chunk_index import ChunkIndex
from draftsmith.boundary.vdb.vector_schemas import ChunkHit
from draftsmith.configs.retrieval import RetrievalSettings
from draftsmith.core.document_processing.tasks import EmbeddingTask
from draftsmith.core.exceptions import VectorStoreError
from draftsmith.core.retrieval import ContextRetriever
from draftsmith.core.retrieval.context_retriever import render_hits

USER = "user-1"
BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def retrieval_settings() -> RetrievalSettings:
    return RetrievalSettings(top_k=5, fallback_document_limit=5)


@pytest.fixture
def failing_index() -> MagicMock:
    """Chunk index whose search always raises."""
    index = MagicMock(spec=ChunkIndex)
    index.search = AsyncMock(side_effect=VectorStoreError("index unavailable"))
    return index


async def seed_documents(session, make_document, count: int) -> list[str]:
    """Create `count` documents one minute apart; return their texts newest first."""
    texts = []
    for i in range(count):
        await make_document(
            session,
            USER,
            f"doc-{i}.txt",
            [f"doc {i} part a", f"doc {i} part b"],
            created_at=BASE_TIME + timedelta(minutes=i),
        )
        texts.append(f"doc {i} part a\ndoc {i} part b")
    return list(reversed(texts))


class TestRenderHits:
    def test_groups_chunks_by_document_in_rank_order(self) -> None:
        """Test a document's chunks stay contiguous, ordered by its best hit."""
        # Arrange
        doc_a, doc_b = uuid.uuid4(), uuid.uuid4()
        hits = [
            ChunkHit(document_id=doc_a, position=2, content="A2", distance=0.1),
            ChunkHit(document_id=doc_b, position=0, content="B0", distance=0.2),
            ChunkHit(document_id=doc_a, position=0, content="A0", distance=0.3),
        ]

        # Act & Assert
        assert render_hits(hits) == "A2\nA0\n\nB0"


class TestRetrieveFallback:
    """Test suite for the recency fallback."""

    @pytest.mark.asyncio
    async def test_search_error_returns_five_most_recent_documents(
        self,
        test_async_db,
        make_document,
        mock_embeddings,
        failing_index,
        retrieval_settings,
    ) -> None:
        """Test a raising search yields the 5 newest documents' text, newest first."""
        # Arrange
        newest_first = await seed_documents(test_async_db, make_document, 7)
        retriever = ContextRetriever(
            EmbeddingTask(mock_embeddings, dimension=4),
            failing_index,
            retrieval_settings,
        )

        # Act
        context = await retriever.retrieve(test_async_db, USER, "Senior Python role")

        # Assert
        assert context == "\n\n".join(newest_first[:5])
        failing_index.search.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_degraded_query_embedding_falls_back(
        self,
        test_async_db,
        make_document,
        mock_embeddings,
        retrieval_settings,
    ) -> None:
        """Test an embedding outage on the prompt routes to the recency path."""
        # Arrange
        newest_first = await seed_documents(test_async_db, make_document, 2)
        mock_embeddings.aembed_query.side_effect = RuntimeError("quota")
        retriever = ContextRetriever(
            EmbeddingTask(mock_embeddings, dimension=4),
            ChunkIndex(dimension=4),
            retrieval_settings,
        )

        # Act
        context = await retriever.retrieve(test_async_db, USER, "anything")

        # Assert
        assert context == "\n\n".join(newest_first)

    @pytest.mark.asyncio
    async def test_fallback_skips_documents_without_chunks(
        self, test_async_db, make_document, mock_embeddings, failing_index, retrieval_settings
    ) -> None:
        # Arrange
        await make_document(test_async_db, USER, "empty.png", [], created_at=BASE_TIME)
        await make_document(
            test_async_db, USER, "cv.txt", ["Jane Doe"], created_at=BASE_TIME - timedelta(days=1)
        )
        retriever = ContextRetriever(
            EmbeddingTask(mock_embeddings, dimension=4), failing_index, retrieval_settings
        )

        # Act & Assert
        assert await retriever.retrieve(test_async_db, USER, "q") == "Jane Doe"

    @pytest.mark.asyncio
    async def test_fallback_never_reads_other_users(
        self, test_async_db, make_document, mock_embeddings, failing_index, retrieval_settings
    ) -> None:
        await make_document(test_async_db, "someone-else", "theirs.txt", ["secret"])
        retriever = ContextRetriever(
            EmbeddingTask(mock_embeddings, dimension=4), failing_index, retrieval_settings
        )

        assert await retriever.retrieve(test_async_db, USER, "q") == ""


class TestRetrieveSimilarity:
    """Test suite for the similarity path."""

    @pytest.mark.asyncio
    async def test_returns_nearest_chunks(
        self, test_async_db, make_document, mock_embeddings
    ) -> None:
        """Test the chunk whose vector matches the query is returned first."""
        # Arrange
        await make_document(
            test_async_db,
            USER,
            "cv.txt",
            ["Python and FastAPI", "Gardening hobby"],
            embeddings=[[1.0, 0.0, 0.0, 0.0], [0.0, 0.0, 0.0, 1.0]],
        )
        mock_embeddings.aembed_query.return_value = [0.9, 0.1, 0.0, 0.0]
        retriever = ContextRetriever(
            EmbeddingTask(mock_embeddings, dimension=4),
            ChunkIndex(dimension=4),
            RetrievalSettings(top_k=1, fallback_document_limit=5),
        )

        # Act
        context = await retriever.retrieve(test_async_db, USER, "python developer")

        # Assert
        assert context == "Python and FastAPI"
