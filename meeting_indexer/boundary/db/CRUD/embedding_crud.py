"""
Embedding CRUD operations.

Stores chunk vectors and their vector_index rows, and serves the
candidate rows scanned by similarity search.

Dependencies: sqlalchemy, meeting_indexer.boundary.db.models
System role: Vector persistence operations
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from meeting_indexer.boundary.db.CRUD.base_crud import BaseCRUD
from meeting_indexer.boundary.db.models import (
    PREVIEW_LENGTH,
    ChunkEmbeddingModel,
    ChunkModel,
    VectorIndexModel,
)


@dataclass
class EmbeddedChunk:
    """One chunk with its encoded vector, ready to persist."""

    chunk: ChunkModel
    vector: bytes
    dimension: int
    magnitude: float


@dataclass
class SearchCandidate:
    """Row scanned by similarity search."""

    chunk_id: str
    document_id: UUID
    title: str | None
    occurred_at: datetime | None
    preview: str
    relevance_score: float
    vector: bytes
    magnitude: float


class EmbeddingCRUD(BaseCRUD[ChunkEmbeddingModel]):
    """CRUD operations for ChunkEmbeddingModel and VectorIndexModel."""

    def __init__(self) -> None:
        """Initialize EmbeddingCRUD with ChunkEmbeddingModel."""
        super().__init__(ChunkEmbeddingModel)

    async def store_group(
        self,
        session: AsyncSession,
        document_id: UUID,
        embedded: Sequence[EmbeddedChunk],
        model_name: str,
        title: str | None,
        occurred_at: datetime | None,
    ) -> int:
        """
        Upsert vectors and vector_index rows for a group of chunks.

        Existing rows are overwritten, so forced re-embedding keeps one
        vector per chunk.

        Args:
            session: Async database session
            document_id: Owning document UUID
            embedded: Chunks with encoded vectors
            model_name: Provider model name
            title: Document title for the index row
            occurred_at: Document timestamp for the index row

        Returns:
            int: Number of chunks stored
        """
        chunk_ids = [item.chunk.id for item in embedded]
        existing_index = {
            row.chunk_id: row
            for row in (
                await session.execute(
                    select(VectorIndexModel).where(VectorIndexModel.chunk_id.in_(chunk_ids))
                )
            ).scalars()
        }

        for item in embedded:
            await session.merge(
                ChunkEmbeddingModel(
                    chunk_id=item.chunk.id,
                    document_id=document_id,
                    vector=item.vector,
                    dimension=item.dimension,
                    magnitude=item.magnitude,
                    model_name=model_name,
                )
            )

            index_row = existing_index.get(item.chunk.id)
            if index_row is None:
                index_row = VectorIndexModel(chunk_id=item.chunk.id, document_id=document_id)
                session.add(index_row)
            index_row.parent_chunk_id = item.chunk.parent_chunk_id
            index_row.title = title
            index_row.occurred_at = occurred_at
            index_row.chunk_preview = item.chunk.content[:PREVIEW_LENGTH]
            index_row.relevance_score = 1.0

        await session.flush()
        return len(embedded)

    async def count_by_document(self, session: AsyncSession, document_id: UUID) -> int:
        """Count stored vectors of a document."""
        result = await session.execute(
            select(func.count())
            .select_from(ChunkEmbeddingModel)
            .where(ChunkEmbeddingModel.document_id == document_id)
        )
        return result.scalar_one()

    async def get_search_candidates(
        self,
        session: AsyncSession,
        document_id: UUID | None = None,
    ) -> list[SearchCandidate]:
        """
        Retrieve every indexed vector, optionally restricted to one document.

        Args:
            session: Async database session
            document_id: Restrict to this document (None for all)

        Returns:
            list[SearchCandidate]: Vector blobs with their index metadata
        """
        stmt = select(
            VectorIndexModel.chunk_id,
            VectorIndexModel.document_id,
            VectorIndexModel.title,
            VectorIndexModel.occurred_at,
            VectorIndexModel.chunk_preview,
            VectorIndexModel.relevance_score,
            ChunkEmbeddingModel.vector,
            ChunkEmbeddingModel.magnitude,
        ).join(ChunkEmbeddingModel, ChunkEmbeddingModel.chunk_id == VectorIndexModel.chunk_id)
        if document_id is not None:
            stmt = stmt.where(VectorIndexModel.document_id == document_id)

        result = await session.execute(stmt)
        return [
            SearchCandidate(
                chunk_id=row.chunk_id,
                document_id=row.document_id,
                title=row.title,
                occurred_at=row.occurred_at,
                preview=row.chunk_preview,
                relevance_score=row.relevance_score,
                vector=row.vector,
                magnitude=row.magnitude,
            )
            for row in result.all()
        ]


embedding_crud = EmbeddingCRUD()
