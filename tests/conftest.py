"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory SQLite async database, session factory, document seeding
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from collections.abc import Awaitable, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from meeting_indexer.boundary.db import models  # noqa: F401
from meeting_indexer.boundary.db.base import Base
from meeting_indexer.boundary.db.CRUD import processing_task_crud
from meeting_indexer.boundary.db.models import ChunkModel, DocumentModel, DocumentStatus
from meeting_indexer.models import ChunkType, DocumentKind


@pytest.fixture
async def async_engine():
    """
    Create in-memory SQLite async engine with all tables.

    StaticPool keeps one connection so every session sees the same database.
    """
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
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_async_db(session_factory):
    """
    Create an AsyncSession on the in-memory database.

    Yields:
        AsyncSession: Test database session, rolled back on teardown
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


SeedDocument = Callable[..., Awaitable[tuple[uuid.UUID, uuid.UUID, list[str]]]]


@pytest.fixture
def seed_document(session_factory) -> SeedDocument:
    """
    Factory fixture inserting a completed document with N chunks and a vectorize task.

    Returns:
        Callable: async (chunk_count=25, priority=5, title=...) -> (document_id, task_id, chunk_ids)
    """

    async def _seed(
        chunk_count: int = 25,
        priority: int = 5,
        title: str = "Weekly sync",
    ) -> tuple[uuid.UUID, uuid.UUID, list[str]]:
        async with session_factory() as session:
            document = DocumentModel(
                title=title,
                kind=DocumentKind.MEETING,
                status=DocumentStatus.COMPLETED,
                chunk_count=chunk_count,
            )
            session.add(document)
            await session.flush()

            chunk_ids = []
            for index in range(chunk_count):
                chunk_id = f"{uuid.uuid4().hex[:16]}"
                chunk_ids.append(chunk_id)
                session.add(
                    ChunkModel(
                        id=chunk_id,
                        document_id=document.id,
                        position=float(index),
                        sort_key=f"{index:06d}",
                        chunk_type=ChunkType.SPEAKER_TURN,
                        content=f"{title} item {index}: budget review for workstream {index}.",
                        token_count=12,
                    )
                )
            await session.flush()

            task = await processing_task_crud.enqueue(session, document.id, priority=priority)
            await session.commit()
            return document.id, task.id, chunk_ids

    return _seed
