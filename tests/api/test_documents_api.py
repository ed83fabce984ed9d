"""
Test suite for the document endpoints with a mocked DocumentService.

System role: Verification of document HTTP API
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from draftsmith.api.deps.dependencies import get_document_service
from draftsmith.api.main import create_app
from draftsmith.boundary.db.models import DocumentChunkModel, DocumentModel
from draftsmith.core.document_processing.models import PipelineResult
from draftsmith.core.exceptions import DocumentNotFoundError, ValidationError

HEADERS = {"X-User-Id": "u1"}


@pytest.fixture
def mock_document_service():
    return AsyncMock()


@pytest.fixture
def client(mock_document_service):
    app = create_app()
    app.dependency_overrides[get_document_service] = lambda: mock_document_service
    return TestClient(app)


def test_upload_document(client, mock_document_service):
    # Arrange
    document_id = uuid4()
    mock_document_service.upload_document.return_value = PipelineResult(
        document_id=document_id,
        extracted_chars=1200,
        chunk_count=3,
        embedded_count=2,
        processing_time_ms=40.0,
    )

    # Act
    response = client.post(
        "/api/v1/documents",
        headers=HEADERS,
        files={"file": ("cv.txt", b"Jane Doe, engineer", "text/plain")},
        data={"storage_locator": "uploads/u1/cv.txt"},
    )

    # Assert
    assert response.status_code == 201
    body = response.json()
    assert body["document_id"] == str(document_id)
    assert body["chunks_stored"] == 3
    assert body["chunks_embedded"] == 2
    kwargs = mock_document_service.upload_document.await_args.kwargs
    assert kwargs["user_id"] == "u1"
    assert kwargs["media_type"] == "text/plain"
    assert kwargs["data"] == b"Jane Doe, engineer"


def test_upload_guesses_media_type_from_name(client, mock_document_service):
    mock_document_service.upload_document.return_value = PipelineResult(
        document_id=uuid4(), extracted_chars=0, chunk_count=0, embedded_count=0, processing_time_ms=1.0
    )

    client.post(
        "/api/v1/documents",
        headers=HEADERS,
        files={"file": ("cv.pdf", b"%PDF", "application/octet-stream")},
        data={"storage_locator": "uploads/u1/cv.pdf"},
    )

    assert mock_document_service.upload_document.await_args.kwargs["media_type"] == "application/pdf"


def test_upload_requires_storage_locator(client):
    response = client.post(
        "/api/v1/documents",
        headers=HEADERS,
        files={"file": ("cv.txt", b"text", "text/plain")},
    )

    assert response.status_code == 422


def test_upload_validation_error_is_400(client, mock_document_service):
    mock_document_service.upload_document.side_effect = ValidationError(
        "storage_locator must not be empty", field="storage_locator"
    )

    response = client.post(
        "/api/v1/documents",
        headers=HEADERS,
        files={"file": ("cv.txt", b"text", "text/plain")},
        data={"storage_locator": " "},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_list_documents(client, mock_document_service):
    document = DocumentModel(
        id=uuid4(),
        user_id="u1",
        name="cv.txt",
        media_type="text/plain",
        storage_locator="uploads/u1/cv.txt",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        chunks=[DocumentChunkModel(position=0, text="a", embedding=[])],
    )
    mock_document_service.list_documents.return_value = [document]

    response = client.get("/api/v1/documents", headers=HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["documents"][0]["name"] == "cv.txt"
    assert body["documents"][0]["chunk_count"] == 1


def test_delete_document(client, mock_document_service):
    document_id = uuid4()

    response = client.delete(f"/api/v1/documents/{document_id}", headers=HEADERS)

    assert response.status_code == 204
    mock_document_service.delete_document.assert_awaited_once_with("u1", document_id)


def test_delete_missing_document_is_404(client, mock_document_service):
    document_id = uuid4()
    mock_document_service.delete_document.side_effect = DocumentNotFoundError(str(document_id))

    response = client.delete(f"/api/v1/documents/{document_id}", headers=HEADERS)

    assert response.status_code == 404
    assert response.json()["details"]["document_id"] == str(document_id)
