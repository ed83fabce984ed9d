"""
Document API endpoints.

Routes: POST /documents, GET /documents, DELETE /documents/{document_id}

Dependencies: draftsmith.application.services, draftsmith.models
System role: Document HTTP API
"""

import logging
import mimetypes
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from draftsmith.api.deps import get_document_service, get_user_id
from draftsmith.application.services import DocumentService
from draftsmith.core.exceptions import ValidationError
from draftsmith.models.document import (
    DocumentListResponse,
    DocumentResponse,
    DocumentUploadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])

MAX_FILE_SIZE = 25 * 1024 * 1024  # 25MB


def resolve_media_type(file: UploadFile) -> str:
    """Use the declared content type, else guess from the file name."""
    declared = (file.content_type or "").split(";")[0].strip().lower()
    if declared and declared != "application/octet-stream":
        return declared
    guessed, _ = mimetypes.guess_type(file.filename or "")
    return guessed or "application/octet-stream"


@router.post("", response_model=DocumentUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    file: UploadFile = File(...),
    storage_locator: str = Form(...),
    user_id: str = Depends(get_user_id),
    service: DocumentService = Depends(get_document_service),
) -> DocumentUploadResponse:
    """
    Ingest an uploaded document and refresh the user's profile.

    Unreadable or unsupported files are still stored, with no chunks.
    """
    data = await file.read()
    if len(data) > MAX_FILE_SIZE:
        raise ValidationError(
            f"File exceeds {MAX_FILE_SIZE // (1024 * 1024)}MB limit",
            field="file",
        )

    name = file.filename or "document"
    result = await service.upload_document(
        user_id=user_id,
        name=name,
        media_type=resolve_media_type(file),
        storage_locator=storage_locator,
        data=data,
    )
    return DocumentUploadResponse(
        document_id=result.document_id,
        name=name,
        extracted_chars=result.extracted_chars,
        chunks_stored=result.chunk_count,
        chunks_embedded=result.embedded_count,
        processing_time_ms=result.processing_time_ms,
    )


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    user_id: str = Depends(get_user_id),
    service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """List the user's documents, newest first."""
    documents = await service.list_documents(user_id)
    items = [
        DocumentResponse(
            id=doc.id,
            name=doc.name,
            media_type=doc.media_type,
            storage_locator=doc.storage_locator,
            created_at=doc.created_at,
            chunk_count=len(doc.chunks),
        )
        for doc in documents
    ]
    return DocumentListResponse(documents=items, total=len(items))


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: UUID,
    user_id: str = Depends(get_user_id),
    service: DocumentService = Depends(get_document_service),
) -> Response:
    """Delete a document and its chunks, then refresh the profile."""
    await service.delete_document(user_id, document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
