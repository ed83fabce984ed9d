"""
Test suite for the FAISS-backed ChunkIndex.

System role: Verification of user-scoped similarity search
"""

import pytest

from draftsmith.boundary.vdb.chunk_index import ChunkIndex
from draftsmith.boundary.vdb.vector_schemas import VectorQuery
from draftsmith.core.exceptions import VectorStoreError


@pytest.fixture
def index() -> ChunkIndex:
    return ChunkIndex(dimension=2)


class TestChunkIndexSearch:
    @pytest.mark.asyncio
    async def test_nearest_chunks_first(self, index, test_async_db, make_document) -> None:
        """Test hits come back ordered by distance and capped at top_k."""
        # Arrange
        await make_document(
            test_async_db,
            "u1",
            "cv.txt",
            ["far", "near", "middle"],
            embeddings=[[-1.0, 0.0], [1.0, 0.0], [0.0, 1.0]],
        )

        # Act
        hits = await index.search(
            test_async_db, VectorQuery(user_id="u1", embedding=[0.9, 0.1], top_k=2)
        )

        # Assert
        assert [h.content for h in hits] == ["near", "middle"]
        assert hits[0].distance < hits[1].distance
        assert hits[0].position == 1

    @pytest.mark.asyncio
    async def test_other_users_chunks_never_returned(
        self, index, test_async_db, make_document
    ) -> None:
        await make_document(test_async_db, "u1", "mine.txt", ["mine"], embeddings=[[0.0, 1.0]])
        await make_document(test_async_db, "u2", "theirs.txt", ["theirs"], embeddings=[[1.0, 0.0]])

        hits = await index.search(
            test_async_db, VectorQuery(user_id="u1", embedding=[1.0, 0.0], top_k=5)
        )

        assert [h.content for h in hits] == ["mine"]

    @pytest.mark.asyncio
    async def test_top_k_larger_than_index(self, index, test_async_db, make_document) -> None:
        await make_document(test_async_db, "u1", "cv.txt", ["only"], embeddings=[[1.0, 1.0]])

        hits = await index.search(
            test_async_db, VectorQuery(user_id="u1", embedding=[1.0, 1.0], top_k=10)
        )

        assert len(hits) == 1
        assert hits[0].distance == pytest.approx(0.0)


class TestChunkIndexErrors:
    @pytest.mark.asyncio
    async def test_empty_query_vector(self, index, test_async_db) -> None:
        with pytest.raises(VectorStoreError, match="empty"):
            await index.search(test_async_db, VectorQuery(user_id="u1", embedding=[]))

    @pytest.mark.asyncio
    async def test_wrong_query_dimension(self, index, test_async_db) -> None:
        with pytest.raises(VectorStoreError, match="dimension"):
            await index.search(test_async_db, VectorQuery(user_id="u1", embedding=[1.0, 2.0, 3.0]))

    @pytest.mark.asyncio
    async def test_no_embedded_chunks(self, index, test_async_db, make_document) -> None:
        """Test degrade-mode and foreign-dimension chunks leave nothing to search."""
        # Arrange
        await make_document(
            test_async_db,
            "u1",
            "cv.txt",
            ["blank", "wide"],
            embeddings=[[], [1.0, 2.0, 3.0]],
        )

        # Act / Assert
        with pytest.raises(VectorStoreError, match="No embedded chunks"):
            await index.search(test_async_db, VectorQuery(user_id="u1", embedding=[1.0, 0.0]))
