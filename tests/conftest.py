"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory async database, session factory, provider doubles
Dependencies: pytest, sqlalchemy, unittest.mock
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
async def db_engine():
    """
    Create an in-memory SQLite async engine with all tables.

    StaticPool keeps a single connection, so every session sees the same
    in-memory database.

    Yields:
        AsyncEngine: Test engine (disposed after the test)
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    import draftsmith.boundary.db.models  # noqa: F401
    from draftsmith.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Session factory bound to the test engine."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_async_db(session_factory):
    """
    Create a test database session.

    Yields:
        AsyncSession: Session rolled back after the test
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_embeddings() -> MagicMock:
    """
    Embeddings client double returning a fixed 4-dim vector.

    Returns:
        MagicMock: Object with an async aembed_query
    """
    embeddings = MagicMock()
    embeddings.aembed_query = AsyncMock(return_value=[0.1, 0.2, 0.3, 0.4])
    return embeddings


@pytest.fixture
def mock_invoker() -> MagicMock:
    """
    LLMInvoker double.

    Returns:
        MagicMock: Object with an async invoke
    """
    invoker = MagicMock()
    invoker.invoke = AsyncMock(return_value="")
    return invoker


@pytest.fixture
def make_document():
    """
    Factory persisting a document with chunks and an explicit creation time.

    Returns:
        Callable: async (session, user_id, name, texts, embeddings=None, created_at=None) -> DocumentModel
    """
    from datetime import datetime, timezone

    from draftsmith.boundary.db.models import DocumentChunkModel, DocumentModel

    async def _make(session, user_id, name, texts, embeddings=None, created_at=None):
        embeddings = embeddings or [[] for _ in texts]
        document = DocumentModel(
            user_id=user_id,
            name=name,
            media_type="text/plain",
            storage_locator=f"uploads/{user_id}/{name}",
            created_at=created_at or datetime.now(timezone.utc),
            chunks=[
                DocumentChunkModel(position=i, text=text, embedding=vector)
                for i, (text, vector) in enumerate(zip(texts, embeddings))
            ],
        )
        session.add(document)
        await session.flush()
        return document

    return _make
