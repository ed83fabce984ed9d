"""
Document service orchestrator.

Coordinates document upload, listing and deletion. Both upload and
deletion change the user's corpus, so both end with a profile refresh.

Dependencies: draftsmith.core.document_processing, draftsmith.boundary.db
System role: Document management orchestration
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from draftsmith.application.services.profile_service import ProfileService
from draftsmith.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from draftsmith.boundary.db.models.document_model import DocumentModel
from draftsmith.core.document_processing.entrypoint import DocumentPipeline
from draftsmith.core.document_processing.models import PipelineResult
from draftsmith.core.exceptions import DocumentNotFoundError, ValidationError

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Document service orchestrator.

    Uses DocumentPipeline for ingestion and ProfileService to keep the
    derived profile in step with the corpus.
    """

    def __init__(
        self,
        db: AsyncSession,
        pipeline: DocumentPipeline,
        profile_service: ProfileService,
        crud: DocumentCRUD | None = None,
    ) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession for document persistence
            pipeline: Ingestion pipeline
            profile_service: Profile refresh after corpus changes
            crud: Document CRUD (defaults to the module singleton)
        """
        self.db = db
        self.pipeline = pipeline
        self.profile_service = profile_service
        self._crud = crud or document_crud

    async def upload_document(
        self,
        user_id: str,
        name: str,
        media_type: str,
        storage_locator: str,
        data: bytes,
    ) -> PipelineResult:
        """
        Ingest an uploaded document and refresh the profile.

        Steps:
        1. Extract -> chunk -> embed -> persist (degrades, never aborts)
        2. Commit the document so it is part of the corpus
        3. Re-extract and merge the profile

        Args:
            user_id: Owning user
            name: Original file name
            media_type: MIME type reported by the upload
            storage_locator: Object storage key of the stored binary
            data: Uploaded bytes

        Returns:
            PipelineResult: Persisted document ID and chunk statistics

        Raises:
            ValidationError: If the storage locator is empty
        """
        if not storage_locator.strip():
            raise ValidationError("storage_locator must not be empty", field="storage_locator")

        result = await self.pipeline.process(
            self.db,
            user_id=user_id,
            name=name,
            media_type=media_type,
            storage_locator=storage_locator,
            data=data,
        )
        await self.db.commit()

        await self.profile_service.refresh_profile(user_id)
        return result

    async def list_documents(self, user_id: str) -> Sequence[DocumentModel]:
        """List the user's documents, newest first."""
        return await self._crud.get_recent_by_user(self.db, user_id)

    async def delete_document(self, user_id: str, document_id: UUID) -> None:
        """
        Delete a user-owned document (chunks cascade) and refresh the profile.

        Raises:
            DocumentNotFoundError: If the document does not exist for this user
        """
        deleted = await self._crud.delete_for_user(self.db, user_id, document_id)
        if not deleted:
            raise DocumentNotFoundError(str(document_id))
        await self.db.commit()

        logger.info(
            f"{__name__}:delete_document - Document deleted",
            extra={"user_id": user_id, "document_id": str(document_id)},
        )
        await self.profile_service.refresh_profile(user_id)
