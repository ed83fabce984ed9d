"""
Document and chunk ORM models.

A document is owned by one user and holds an ordered sequence of chunks.
Each chunk keeps its text window and an optional embedding vector; an empty
vector list marks a chunk stored in degrade mode.

Dependencies: sqlalchemy, draftsmith.boundary.db.base
System role: Document persistence for ingestion and retrieval
"""

from uuid import UUID

from sqlalchemy import JSON, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from draftsmith.boundary.db.base import Base, TimestampMixin, UUIDMixin


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Uploaded document ORM model.

    A document with no extractable text still persists with an empty
    chunk sequence. Chunks are loaded eagerly in position order and are
    deleted with their document.

    Attributes:
        user_id: Owning user identity (resolved upstream)
        name: Original file name
        media_type: MIME type of the uploaded binary
        storage_locator: Object storage key of the binary
        chunks: Ordered DocumentChunkModel rows
    """

    __tablename__ = "documents"

    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(512), nullable=False)
    media_type: Mapped[str] = mapped_column(String(128), nullable=False)
    storage_locator: Mapped[str] = mapped_column(String(1024), nullable=False)

    chunks: Mapped[list["DocumentChunkModel"]] = relationship(
        "DocumentChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="DocumentChunkModel.position",
        lazy="selectin",
    )

    @property
    def text(self) -> str:
        """Chunk text joined in document order."""
        return "\n".join(chunk.text for chunk in self.chunks)


class DocumentChunkModel(Base, UUIDMixin):
    """
    One text window of a document.

    Attributes:
        document_id: Parent document
        position: Zero-based window index within the document
        text: Window text (length <= configured chunk size)
        embedding: Vector of the provider's fixed dimension, or [] in degrade mode
    """

    __tablename__ = "document_chunks"

    document_id: Mapped[UUID] = mapped_column(
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[list[float]] = mapped_column(JSON, nullable=False, default=list)

    document: Mapped[DocumentModel] = relationship(
        "DocumentModel",
        back_populates="chunks",
    )

    @property
    def has_embedding(self) -> bool:
        return bool(self.embedding)
