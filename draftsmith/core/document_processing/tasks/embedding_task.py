"""
Embedding generation task with per-chunk degrade mode.

Each chunk is embedded by its own call. A failed call (quota, outage,
malformed response) yields an empty vector for that chunk only, so a
batch in which the provider fails still persists every chunk.

Dependencies: langchain_core
System role: Third stage of document ingestion pipeline; query embedding for retrieval
"""

import asyncio
import logging

from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Embed chunk and query text, degrading failures to empty vectors."""

    def __init__(
        self,
        embeddings: Embeddings,
        dimension: int,
        concurrency: int = 8,
    ) -> None:
        """
        Initialize embedding task.

        Args:
            embeddings: LangChain embeddings client
            dimension: Required vector dimension; other sizes count as failures
            concurrency: Maximum in-flight calls within one embed_many
        """
        self._embeddings = embeddings
        self._dimension = dimension
        self._concurrency = concurrency

    async def embed(self, text: str) -> list[float]:
        """
        Embed a single text.

        Args:
            text: Chunk or query text

        Returns:
            list[float]: Vector of the configured dimension, or [] on failure
        """
        try:
            vector = await self._embeddings.aembed_query(text)
        except Exception as e:
            logger.warning(
                f"{__name__}:embed - Embedding failed, storing empty vector",
                extra={
                    "text_len": len(text),
                    "error_type": type(e).__name__,
                    "error_msg": str(e)[:300],
                },
            )
            return []

        if not vector or len(vector) != self._dimension:
            logger.warning(
                f"{__name__}:embed - Unexpected vector size, storing empty vector",
                extra={"expected": self._dimension, "received": len(vector or [])},
            )
            return []
        return [float(v) for v in vector]

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        """
        Embed texts independently; one failure never affects another.

        Args:
            texts: Chunk texts in document order

        Returns:
            list[list[float]]: One vector (possibly empty) per input, same order
        """
        if not texts:
            return []

        semaphore = asyncio.Semaphore(self._concurrency)

        async def _bounded(text: str) -> list[float]:
            async with semaphore:
                return await self.embed(text)

        vectors = await asyncio.gather(*(_bounded(t) for t in texts))
        degraded = sum(1 for v in vectors if not v)
        if degraded:
            logger.warning(
                f"{__name__}:embed_many - {degraded}/{len(texts)} chunks stored without vectors"
            )
        return list(vectors)
