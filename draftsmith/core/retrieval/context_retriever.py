"""
Per-request context retrieval.

Embeds the prompt and runs a user-scoped similarity search. If anything on
that path raises (embedding degraded, index empty, store failure), the
retriever switches wholesale to the user's most recent documents. The two
paths are never mixed within one call.

Dependencies: sqlalchemy, draftsmith.boundary.vdb, draftsmith.core.document_processing
System role: Context assembly for generation
"""

import logging
from collections import OrderedDict
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from draftsmith.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from draftsmith.boundary.db.models.document_model import DocumentModel
from draftsmith.boundary.vdb.chunk_index import ChunkIndex
from draftsmith.boundary.vdb.vector_schemas import ChunkHit, VectorQuery
from draftsmith.configs.retrieval import RetrievalSettings
from draftsmith.core.document_processing.tasks.embedding_task import EmbeddingTask

logger = logging.getLogger(__name__)

CHUNK_SEPARATOR = "\n"
DOCUMENT_SEPARATOR = "\n\n"


def render_hits(hits: Sequence[ChunkHit]) -> str:
    """
    Join similarity hits, keeping chunks of one document contiguous.

    Documents appear in order of their best-ranked chunk; chunks within a
    document keep their similarity order.
    """
    grouped: OrderedDict[UUID, list[str]] = OrderedDict()
    for hit in hits:
        grouped.setdefault(hit.document_id, []).append(hit.content)
    return DOCUMENT_SEPARATOR.join(CHUNK_SEPARATOR.join(texts) for texts in grouped.values())


def render_documents(documents: Sequence[DocumentModel]) -> str:
    """Join each document's chunks in position order, documents in the given order."""
    blocks = [doc.text for doc in documents if doc.chunks]
    return DOCUMENT_SEPARATOR.join(blocks)


class ContextRetriever:
    """Retrieve the most relevant chunk text for a user's prompt."""

    def __init__(
        self,
        embedding_task: EmbeddingTask,
        chunk_index: ChunkIndex,
        settings: RetrievalSettings,
        crud: DocumentCRUD | None = None,
    ) -> None:
        self._embedding_task = embedding_task
        self._chunk_index = chunk_index
        self._settings = settings
        self._crud = crud or document_crud

    async def retrieve(self, session: AsyncSession, user_id: str, prompt: str) -> str:
        """
        Return concatenated relevant text for the prompt.

        Args:
            session: Async database session
            user_id: Requesting user; only their documents are considered
            prompt: Free-text request (job description, instruction)

        Returns:
            str: Similarity-ranked chunk text, or recency fallback text
        """
        try:
            vector = await self._embedding_task.embed(prompt)
            hits = await self._chunk_index.search(
                session,
                VectorQuery(user_id=user_id, embedding=vector, top_k=self._settings.top_k),
            )
        except Exception as e:
            logger.warning(
                f"{__name__}:retrieve - Similarity search unavailable, using recency fallback",
                extra={
                    "user_id": user_id,
                    "error_type": type(e).__name__,
                    "error_msg": str(e)[:300],
                },
            )
            return await self.retrieve_recent(session, user_id)

        context = render_hits(hits)
        logger.info(
            f"{__name__}:retrieve - Similarity path",
            extra={"user_id": user_id, "hits": len(hits), "context_len": len(context)},
        )
        return context

    async def retrieve_recent(self, session: AsyncSession, user_id: str) -> str:
        """
        Return all chunks of the user's most recently created documents.

        Args:
            session: Async database session
            user_id: Requesting user

        Returns:
            str: Document texts newest first
        """
        documents = await self._crud.get_recent_by_user(
            session,
            user_id,
            limit=self._settings.fallback_document_limit,
        )
        context = render_documents(documents)
        logger.info(
            f"{__name__}:retrieve_recent - Recency path",
            extra={"user_id": user_id, "documents": len(documents), "context_len": len(context)},
        )
        return context
