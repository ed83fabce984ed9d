"""
Test suite for DocumentService.

System role: Verification of upload, listing and deletion orchestration
"""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from draftsmith.application.services.document_service import DocumentService
from draftsmith.core.document_processing.models import PipelineResult
from draftsmith.core.exceptions import DocumentNotFoundError, ValidationError


@pytest.fixture
def pipeline() -> MagicMock:
    """DocumentPipeline double returning a fixed result."""
    pipeline = MagicMock()
    pipeline.process = AsyncMock(
        return_value=PipelineResult(
            document_id=uuid.uuid4(),
            extracted_chars=1200,
            chunk_count=3,
            embedded_count=3,
            processing_time_ms=12.5,
        )
    )
    return pipeline


@pytest.fixture
def profile_service() -> MagicMock:
    profile_service = MagicMock()
    profile_service.refresh_profile = AsyncMock(return_value=None)
    return profile_service


@pytest.fixture
def service(test_async_db, pipeline, profile_service) -> DocumentService:
    return DocumentService(db=test_async_db, pipeline=pipeline, profile_service=profile_service)


class TestUploadDocument:
    @pytest.mark.asyncio
    async def test_upload_runs_pipeline_then_refreshes_profile(
        self, service, pipeline, profile_service, test_async_db
    ) -> None:
        # Act
        result = await service.upload_document(
            "u1", "cv.pdf", "application/pdf", "uploads/u1/cv.pdf", b"%PDF"
        )

        # Assert
        assert result.chunk_count == 3
        pipeline.process.assert_awaited_once_with(
            test_async_db,
            user_id="u1",
            name="cv.pdf",
            media_type="application/pdf",
            storage_locator="uploads/u1/cv.pdf",
            data=b"%PDF",
        )
        profile_service.refresh_profile.assert_awaited_once_with("u1")

    @pytest.mark.asyncio
    async def test_blank_storage_locator_rejected(self, service, pipeline, profile_service) -> None:
        with pytest.raises(ValidationError):
            await service.upload_document("u1", "cv.pdf", "application/pdf", "  ", b"%PDF")

        pipeline.process.assert_not_awaited()
        profile_service.refresh_profile.assert_not_awaited()


class TestListDocuments:
    @pytest.mark.asyncio
    async def test_newest_first(self, service, test_async_db, make_document) -> None:
        now = datetime.now(timezone.utc)
        await make_document(test_async_db, "u1", "a.txt", ["a"], created_at=now - timedelta(hours=1))
        await make_document(test_async_db, "u1", "b.txt", ["b"], created_at=now)

        documents = await service.list_documents("u1")

        assert [d.name for d in documents] == ["b.txt", "a.txt"]


class TestDeleteDocument:
    @pytest.mark.asyncio
    async def test_delete_refreshes_profile(
        self, service, profile_service, test_async_db, make_document
    ) -> None:
        document = await make_document(test_async_db, "u1", "cv.txt", ["a"])

        await service.delete_document("u1", document.id)

        assert await service.list_documents("u1") == []
        profile_service.refresh_profile.assert_awaited_once_with("u1")

    @pytest.mark.asyncio
    async def test_missing_document(self, service, profile_service) -> None:
        with pytest.raises(DocumentNotFoundError):
            await service.delete_document("u1", uuid.uuid4())

        profile_service.refresh_profile.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_other_users_document_is_not_found(
        self, service, test_async_db, make_document
    ) -> None:
        document = await make_document(test_async_db, "u2", "cv.txt", ["a"])

        with pytest.raises(DocumentNotFoundError):
            await service.delete_document("u1", document.id)
