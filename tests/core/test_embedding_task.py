"""
Test suite for EmbeddingTask degrade mode.

System role: Verification that embedding failures never drop chunks
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from draftsmith.core.document_processing.tasks import EmbeddingTask


@pytest.fixture
def embedding_task(mock_embeddings: MagicMock) -> EmbeddingTask:
    return EmbeddingTask(mock_embeddings, dimension=4, concurrency=2)


class TestEmbed:
    """Test suite for EmbeddingTask.embed."""

    @pytest.mark.asyncio
    async def test_returns_vector_on_success(self, embedding_task: EmbeddingTask) -> None:
        assert await embedding_task.embed("chunk") == [0.1, 0.2, 0.3, 0.4]

    @pytest.mark.asyncio
    async def test_provider_error_degrades_to_empty(
        self, embedding_task: EmbeddingTask, mock_embeddings: MagicMock
    ) -> None:
        """Test quota/outage errors yield an empty vector."""
        # Arrange
        mock_embeddings.aembed_query.side_effect = RuntimeError("429 quota exceeded")

        # Act & Assert
        assert await embedding_task.embed("chunk") == []

    @pytest.mark.asyncio
    async def test_wrong_dimension_degrades_to_empty(
        self, embedding_task: EmbeddingTask, mock_embeddings: MagicMock
    ) -> None:
        mock_embeddings.aembed_query.return_value = [0.1, 0.2]

        assert await embedding_task.embed("chunk") == []


class TestEmbedMany:
    """Test suite for EmbeddingTask.embed_many."""

    @pytest.mark.asyncio
    async def test_all_failures_keep_one_empty_vector_per_chunk(
        self, embedding_task: EmbeddingTask, mock_embeddings: MagicMock
    ) -> None:
        """Test a failing provider still yields exactly one vector per chunk."""
        # Arrange
        mock_embeddings.aembed_query.side_effect = RuntimeError("service unavailable")
        chunks = [f"chunk {i}" for i in range(7)]

        # Act
        vectors = await embedding_task.embed_many(chunks)

        # Assert
        assert len(vectors) == len(chunks)
        assert all(v == [] for v in vectors)

    @pytest.mark.asyncio
    async def test_one_failure_does_not_affect_others(self, mock_embeddings: MagicMock) -> None:
        """Test failures are isolated per chunk and order is preserved."""
        # Arrange
        async def embed(text: str) -> list[float]:
            if text == "bad":
                raise RuntimeError("boom")
            return [float(len(text))] * 4

        mock_embeddings.aembed_query = AsyncMock(side_effect=embed)
        task = EmbeddingTask(mock_embeddings, dimension=4)

        # Act
        vectors = await task.embed_many(["a", "bad", "ccc"])

        # Assert
        assert vectors == [[1.0] * 4, [], [3.0] * 4]

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self, mock_embeddings: MagicMock) -> None:
        # Arrange
        in_flight = 0
        peak = 0

        async def embed(text: str) -> list[float]:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return [0.0] * 4

        mock_embeddings.aembed_query = AsyncMock(side_effect=embed)
        task = EmbeddingTask(mock_embeddings, dimension=4, concurrency=3)

        # Act
        await task.embed_many([str(i) for i in range(10)])

        # Assert
        assert peak <= 3

    @pytest.mark.asyncio
    async def test_empty_input(self, embedding_task: EmbeddingTask) -> None:
        assert await embedding_task.embed_many([]) == []
