"""
Dependency injection container.

Factory functions for FastAPI dependencies. Provider clients and the
per-project repair controllers are process-wide and live in ServiceCache;
services are built per request around the request's database session.

Dependencies: draftsmith.configs, draftsmith.application, draftsmith.boundary
System role: DI container for service injection
"""

import threading

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from draftsmith.application.services import (
    CompileService,
    DocumentService,
    GenerationService,
    ProfileService,
    RepairControllers,
    UserLocks,
)
from draftsmith.boundary.db import get_async_db, get_async_session_factory
from draftsmith.configs import Settings, get_settings

USER_HEADER = "X-User-Id"


class ServiceCache:
    """Container for lazily created, process-wide clients."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._lock = threading.RLock()
        self._embeddings = None
        self._embedding_task = None
        self._chat_models = None
        self._invoker = None
        self._chunk_index = None
        self._retriever = None
        self._document_pipeline = None
        self._profile_extractor = None
        self._generation_agent = None
        self._compiler_client = None
        self._repair_controllers = None
        self._profile_locks = UserLocks()

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def _once(self, attr: str, factory):
        value = getattr(self, attr)
        if value is None:
            with self._lock:
                value = getattr(self, attr)
                if value is None:
                    value = factory()
                    setattr(self, attr, value)
        return value

    @property
    def embeddings(self):
        """Get cached Google embeddings client."""

        def build():
            from draftsmith.boundary.vdb.embeddings_wrapper import FixedDimensionEmbeddings

            ingestion = self.settings.ingestion
            return FixedDimensionEmbeddings(
                model=ingestion.embedding_model,
                output_dimensionality=ingestion.embedding_dimension,
                google_api_key=self.settings.llm.fallback_api_key or None,
            )

        return self._once("_embeddings", build)

    @property
    def embedding_task(self):
        def build():
            from draftsmith.core.document_processing.tasks import EmbeddingTask

            ingestion = self.settings.ingestion
            return EmbeddingTask(
                self.embeddings,
                dimension=ingestion.embedding_dimension,
                concurrency=ingestion.embedding_concurrency,
            )

        return self._once("_embedding_task", build)

    @property
    def chat_models(self):
        """Get cached chat model registry (one handle per provider and temperature)."""

        def build():
            from draftsmith.core.agentic_system.providers import ChatModelRegistry

            return ChatModelRegistry(self.settings.llm)

        return self._once("_chat_models", build)

    @property
    def invoker(self):
        def build():
            from draftsmith.core.agentic_system.llm_invoker import LLMInvoker

            return LLMInvoker(
                self.chat_models,
                default_temperature=self.settings.llm.default_temperature,
            )

        return self._once("_invoker", build)

    @property
    def chunk_index(self):
        def build():
            from draftsmith.boundary.vdb.chunk_index import ChunkIndex

            return ChunkIndex(self.settings.ingestion.embedding_dimension)

        return self._once("_chunk_index", build)

    @property
    def retriever(self):
        def build():
            from draftsmith.core.retrieval import ContextRetriever

            return ContextRetriever(
                self.embedding_task,
                self.chunk_index,
                self.settings.retrieval,
            )

        return self._once("_retriever", build)

    @property
    def document_pipeline(self):
        """Get cached document pipeline."""

        def build():
            from draftsmith.core.document_processing.entrypoint import DocumentPipeline

            return DocumentPipeline(self.settings.ingestion, self.embedding_task)

        return self._once("_document_pipeline", build)

    @property
    def profile_extractor(self):
        def build():
            from draftsmith.core.profile.extractor import ProfileExtractor

            return ProfileExtractor(
                self.invoker,
                max_input_chars=self.settings.llm.profile_input_chars,
            )

        return self._once("_profile_extractor", build)

    @property
    def generation_agent(self):
        def build():
            from draftsmith.core.agentic_system.generation.agent import GenerationAgent

            return GenerationAgent(
                self.invoker,
                error_excerpt_chars=self.settings.compiler.error_excerpt_chars,
            )

        return self._once("_generation_agent", build)

    @property
    def compiler_client(self):
        """Get cached compilation service client."""

        def build():
            from draftsmith.boundary.compiler import LatexCompilerClient

            return LatexCompilerClient(self.settings.compiler)

        return self._once("_compiler_client", build)

    @property
    def repair_controllers(self) -> RepairControllers:
        def build():
            return RepairControllers(
                compiler=self.compiler_client,
                repairer=self.generation_agent,
                settings=self.settings.compiler,
                session_factory=get_async_session_factory(),
            )

        return self._once("_repair_controllers", build)

    @property
    def profile_locks(self) -> UserLocks:
        return self._profile_locks

    async def aclose(self) -> None:
        """Cancel pending compiles, close the compiler client and clear the cache."""
        if self._repair_controllers is not None:
            await self._repair_controllers.shutdown()
        if self._compiler_client is not None:
            await self._compiler_client.aclose()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        with self._lock:
            if self._chat_models is not None:
                self._chat_models.clear()
            self._embeddings = None
            self._embedding_task = None
            self._chat_models = None
            self._invoker = None
            self._chunk_index = None
            self._retriever = None
            self._document_pipeline = None
            self._profile_extractor = None
            self._generation_agent = None
            self._compiler_client = None
            self._repair_controllers = None
            self._profile_locks.clear()


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_user_id(x_user_id: str | None = Header(default=None, alias=USER_HEADER)) -> str:
    """
    Resolve the caller's identity from the auth gateway header.

    Raises:
        HTTPException: 401 when the header is missing or blank
    """
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {USER_HEADER} header",
        )
    return x_user_id.strip()


def get_profile_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> ProfileService:
    """
    Get profile service instance.

    Args:
        db: Async database session (injected via Depends)
        cache: Process-wide clients

    Returns:
        ProfileService: Profile service instance
    """
    return ProfileService(db=db, extractor=cache.profile_extractor, locks=cache.profile_locks)


def get_document_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
    profile_service: ProfileService = Depends(get_profile_service),
) -> DocumentService:
    return DocumentService(
        db=db,
        pipeline=cache.document_pipeline,
        profile_service=profile_service,
    )


def get_generation_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
    profile_service: ProfileService = Depends(get_profile_service),
) -> GenerationService:
    return GenerationService(
        db=db,
        agent=cache.generation_agent,
        retriever=cache.retriever,
        profile_service=profile_service,
    )


def get_compile_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> CompileService:
    return CompileService(db=db, controllers=cache.repair_controllers)
