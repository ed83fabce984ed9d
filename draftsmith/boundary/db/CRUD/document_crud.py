"""
Document CRUD operations.

Provides Create, Read, Delete operations for DocumentModel with
user-scoped queries ordered by recency, and chunk vector lookups for the
similarity index.

Dependencies: sqlalchemy, draftsmith.boundary.db.models
System role: Document persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from draftsmith.boundary.db.CRUD.base_crud import BaseCRUD
from draftsmith.boundary.db.models.document_model import DocumentChunkModel, DocumentModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with user-scoped queries. Every read that serves a
    request filters by user_id so one user never sees another's chunks.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def create_with_chunks(
        self,
        session: AsyncSession,
        user_id: str,
        name: str,
        media_type: str,
        storage_locator: str,
        chunks: Sequence[tuple[str, list[float]]],
    ) -> DocumentModel:
        """
        Persist a document and its ordered chunks in one flush.

        Args:
            session: Async database session
            user_id: Owning user
            name: Original file name
            media_type: MIME type
            storage_locator: Object storage key
            chunks: (text, embedding) pairs in document order; embedding may be []

        Returns:
            Created DocumentModel with chunks loaded
        """
        document = DocumentModel(
            user_id=user_id,
            name=name,
            media_type=media_type,
            storage_locator=storage_locator,
            chunks=[
                DocumentChunkModel(position=position, text=text, embedding=list(embedding))
                for position, (text, embedding) in enumerate(chunks)
            ],
        )
        session.add(document)
        await session.flush()
        await session.refresh(document)
        return document

    async def get_for_user(
        self,
        session: AsyncSession,
        user_id: str,
        document_id: UUID,
    ) -> DocumentModel | None:
        """
        Retrieve a document only if it belongs to the user.

        Args:
            session: Async database session
            user_id: Requesting user
            document_id: Document UUID

        Returns:
            DocumentModel if found and owned, None otherwise
        """
        stmt = select(DocumentModel).where(
            DocumentModel.id == document_id,
            DocumentModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_recent_by_user(
        self,
        session: AsyncSession,
        user_id: str,
        limit: int | None = None,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve a user's documents, most recently created first.

        Args:
            session: Async database session
            user_id: Owning user
            limit: Maximum number of documents (None for all)

        Returns:
            Sequence of DocumentModels with chunks in position order
        """
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.user_id == user_id)
            .order_by(DocumentModel.created_at.desc(), DocumentModel.id)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_embedded_chunks(
        self,
        session: AsyncSession,
        user_id: str,
    ) -> Sequence[DocumentChunkModel]:
        """
        Retrieve every chunk of the user's documents.

        Chunks stored in degrade mode (empty embedding) are included; the
        caller decides what to do with them.

        Args:
            session: Async database session
            user_id: Owning user

        Returns:
            Sequence of DocumentChunkModels
        """
        stmt = (
            select(DocumentChunkModel)
            .join(DocumentModel, DocumentChunkModel.document_id == DocumentModel.id)
            .where(DocumentModel.user_id == user_id)
            .order_by(DocumentModel.created_at.desc(), DocumentChunkModel.position)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_for_user(
        self,
        session: AsyncSession,
        user_id: str,
        document_id: UUID,
    ) -> bool:
        """
        Delete a user-owned document and, by cascade, its chunks.

        Returns:
            True if deleted, False if not found or not owned
        """
        document = await self.get_for_user(session, user_id, document_id)
        if document is None:
            return False
        await session.delete(document)
        await session.flush()
        return True


document_crud = DocumentCRUD()
