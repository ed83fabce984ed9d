"""
FAISS similarity index over a user's stored chunk vectors.

Builds an exact (flat L2) index from the user's persisted embeddings at
query time and returns the nearest chunks, closest first. Every failure
mode is raised as VectorStoreError so callers can switch to their
fallback path.

Dependencies: faiss-cpu, numpy, sqlalchemy, draftsmith.boundary.db
System role: Similarity search for context retrieval
"""

import asyncio
import logging

import faiss
import numpy as np
from sqlalchemy.ext.asyncio import AsyncSession

from draftsmith.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from draftsmith.boundary.vdb.vector_schemas import ChunkHit, VectorQuery
from draftsmith.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


class ChunkIndex:
    """
    User-scoped exact nearest-neighbour search over stored chunk vectors.

    Chunks persisted in degrade mode (no vector) or with a foreign
    dimension are left out of the index.
    """

    def __init__(self, dimension: int, crud: DocumentCRUD | None = None) -> None:
        """
        Args:
            dimension: Expected vector dimension
            crud: Document CRUD (defaults to the module singleton)
        """
        self._dimension = dimension
        self._crud = crud or document_crud

    async def search(self, session: AsyncSession, query: VectorQuery) -> list[ChunkHit]:
        """
        Return the user's top-k chunks nearest to the query vector.

        Args:
            session: Async database session
            query: User, query vector and k

        Returns:
            list[ChunkHit]: Hits ordered by distance ascending

        Raises:
            VectorStoreError: Query vector empty or wrong size, no indexed
                chunks for the user, or the store/index failed
        """
        if not query.embedding:
            raise VectorStoreError("Query embedding is empty", operation="query")
        if len(query.embedding) != self._dimension:
            raise VectorStoreError(
                f"Query dimension {len(query.embedding)} != index dimension {self._dimension}",
                operation="query",
            )

        try:
            rows = await self._crud.get_embedded_chunks(session, query.user_id)
        except Exception as e:
            raise VectorStoreError(f"Failed to load chunk vectors: {e}", operation="build") from e

        indexed = [row for row in rows if len(row.embedding or []) == self._dimension]
        if not indexed:
            raise VectorStoreError(
                "No embedded chunks available for user",
                operation="build",
                details={"user_id": query.user_id, "stored_chunks": len(rows)},
            )

        vectors = np.asarray([row.embedding for row in indexed], dtype="float32")
        needle = np.asarray([query.embedding], dtype="float32")
        k = min(query.top_k, len(indexed))

        try:
            distances, ids = await asyncio.to_thread(self._knn, vectors, needle, k)
        except Exception as e:
            raise VectorStoreError(f"FAISS search failed: {e}", operation="query") from e

        hits = []
        for distance, idx in zip(distances[0], ids[0]):
            if idx < 0:
                continue
            row = indexed[int(idx)]
            hits.append(
                ChunkHit(
                    document_id=row.document_id,
                    position=row.position,
                    content=row.text,
                    distance=float(distance),
                )
            )

        logger.info(
            f"{__name__}:search - Retrieved {len(hits)} of {len(indexed)} indexed chunks",
            extra={"user_id": query.user_id, "top_k": query.top_k},
        )
        return hits

    def _knn(self, vectors: np.ndarray, needle: np.ndarray, k: int):
        index = faiss.IndexFlatL2(self._dimension)
        index.add(vectors)
        return index.search(needle, k)
