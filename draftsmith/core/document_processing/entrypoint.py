"""
Document ingestion pipeline orchestrator.

Coordinates extraction, chunking, embedding and persistence for one
uploaded document. Extraction and embedding failures degrade data quality
but never abort the upload.

Dependencies: All task modules, configs, draftsmith.boundary.db
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time

from sqlalchemy.ext.asyncio import AsyncSession

from draftsmith.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from draftsmith.configs.ingestion import IngestionSettings

from .models import PipelineResult
from .tasks import ChunkingTask, EmbeddingTask, ExtractionTask

logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Orchestrate document ingestion: extract -> chunk -> embed -> persist."""

    def __init__(
        self,
        settings: IngestionSettings,
        embedding_task: EmbeddingTask,
        extraction_task: ExtractionTask | None = None,
        crud: DocumentCRUD | None = None,
    ) -> None:
        """
        Initialize pipeline with configuration.

        Args:
            settings: Ingestion settings (window geometry, minimum text)
            embedding_task: Degrading embedding task
            extraction_task: Text extractor (default ExtractionTask)
            crud: Document CRUD (defaults to the module singleton)

        Raises:
            ConfigurationError: When chunk overlap >= chunk size
        """
        self._settings = settings
        self._extraction_task = extraction_task or ExtractionTask()
        self._chunking_task = ChunkingTask(
            chunk_size=settings.chunk_size,
            chunk_overlap=settings.chunk_overlap,
        )
        self._embedding_task = embedding_task
        self._crud = crud or document_crud

    async def process(
        self,
        session: AsyncSession,
        user_id: str,
        name: str,
        media_type: str,
        storage_locator: str,
        data: bytes,
    ) -> PipelineResult:
        """
        Ingest one uploaded document.

        Text is chunked and embedded only when its stripped length exceeds
        min_indexable_chars; otherwise the document is stored with no chunks.

        Args:
            session: Async database session
            user_id: Owning user
            name: Original file name
            media_type: MIME type
            storage_locator: Object storage key of the uploaded binary
            data: Uploaded bytes

        Returns:
            PipelineResult: Persisted document ID and chunk statistics
        """
        start_time = time.perf_counter()
        logger.info(
            f"{__name__}:process - START",
            extra={"user_id": user_id, "doc_name": name, "media_type": media_type},
        )

        text = await self._extraction_task.extract(data, media_type)

        chunks: list[str] = []
        vectors: list[list[float]] = []
        if len(text.strip()) > self._settings.min_indexable_chars:
            chunks = self._chunking_task.chunk(text)
            vectors = await self._embedding_task.embed_many(chunks)
        else:
            logger.info(
                f"{__name__}:process - Text below indexing threshold, storing without chunks",
                extra={"extracted_chars": len(text)},
            )

        document = await self._crud.create_with_chunks(
            session,
            user_id=user_id,
            name=name,
            media_type=media_type,
            storage_locator=storage_locator,
            chunks=list(zip(chunks, vectors)),
        )

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        result = PipelineResult(
            document_id=document.id,
            extracted_chars=len(text),
            chunk_count=len(chunks),
            embedded_count=sum(1 for v in vectors if v),
            processing_time_ms=elapsed_ms,
        )
        logger.info(
            f"{__name__}:process - COMPLETE",
            extra=result.model_dump(mode="json"),
        )
        return result
