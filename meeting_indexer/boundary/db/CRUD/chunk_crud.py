"""
Chunk CRUD operations.

Persists pipeline chunks together with the entities attached to them and
reads them back in reading order.

Dependencies: sqlalchemy, meeting_indexer.boundary.db.models
System role: Chunk and entity persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from meeting_indexer.boundary.db.CRUD.base_crud import BaseCRUD
from meeting_indexer.boundary.db.models import ChunkEmbeddingModel, ChunkModel, ExtractedEntityModel
from meeting_indexer.core.metadata import action_item_details
from meeting_indexer.models import Chunk, EntityType


class ChunkCRUD(BaseCRUD[ChunkModel]):
    """CRUD operations for ChunkModel and its entity annotations."""

    def __init__(self) -> None:
        """Initialize ChunkCRUD with ChunkModel."""
        super().__init__(ChunkModel)

    async def create_with_entities(
        self,
        session: AsyncSession,
        document_id: UUID,
        chunks: Sequence[Chunk],
    ) -> tuple[int, int]:
        """
        Insert chunks and one entity row per (chunk, type, value).

        Chunk rows are flushed before entity rows so the foreign keys hold
        on backends that check constraints immediately.

        Args:
            session: Async database session
            document_id: Owning document UUID
            chunks: Annotated pipeline chunks

        Returns:
            tuple[int, int]: (chunks inserted, entity rows inserted)
        """
        await self.create_many(
            session,
            [ChunkModel.from_domain(chunk, document_id) for chunk in chunks],
        )

        entity_rows: list[ExtractedEntityModel] = []
        for chunk in chunks:
            seen: set[tuple[EntityType, str]] = set()
            for entity in chunk.entities:
                row_key = (entity.type, entity.value)
                if row_key in seen:
                    continue
                seen.add(row_key)

                details: dict = {}
                if entity.type is EntityType.ACTION_ITEM:
                    assignee, due_date = action_item_details(entity.context_window)
                    details = {"assignee": assignee, "due_date": due_date}

                entity_rows.append(
                    ExtractedEntityModel(
                        chunk_id=chunk.id,
                        document_id=document_id,
                        entity_type=entity.type,
                        entity_value=entity.value,
                        confidence=entity.confidence,
                        context=entity.context_window,
                        source_position=entity.source_position,
                        details=details,
                    )
                )

        if entity_rows:
            await self.create_many(session, entity_rows)
        return len(chunks), len(entity_rows)

    async def get_by_document(
        self,
        session: AsyncSession,
        document_id: UUID,
        chunk_ids: Sequence[str] | None = None,
    ) -> Sequence[ChunkModel]:
        """
        Retrieve chunks of a document in reading order.

        Args:
            session: Async database session
            document_id: Owning document UUID
            chunk_ids: Restrict to these chunk ids (None for all)

        Returns:
            Sequence of ChunkModels ordered by position then sort key
        """
        stmt = select(ChunkModel).where(ChunkModel.document_id == document_id)
        if chunk_ids is not None:
            stmt = stmt.where(ChunkModel.id.in_(chunk_ids))
        stmt = stmt.order_by(ChunkModel.position, ChunkModel.sort_key)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_unembedded(
        self,
        session: AsyncSession,
        document_id: UUID,
        chunk_ids: Sequence[str] | None = None,
    ) -> Sequence[ChunkModel]:
        """
        Retrieve chunks of a document that have no stored vector yet.

        Args:
            session: Async database session
            document_id: Owning document UUID
            chunk_ids: Restrict to these chunk ids (None for all)

        Returns:
            Sequence of ChunkModels without a chunk_embeddings row
        """
        stmt = (
            select(ChunkModel)
            .outerjoin(ChunkEmbeddingModel, ChunkEmbeddingModel.chunk_id == ChunkModel.id)
            .where(ChunkModel.document_id == document_id)
            .where(ChunkEmbeddingModel.chunk_id.is_(None))
        )
        if chunk_ids is not None:
            stmt = stmt.where(ChunkModel.id.in_(chunk_ids))
        stmt = stmt.order_by(ChunkModel.position, ChunkModel.sort_key)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_entities_by_document(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[ExtractedEntityModel]:
        """Retrieve entity rows of a document, highest confidence first."""
        stmt = (
            select(ExtractedEntityModel)
            .where(ExtractedEntityModel.document_id == document_id)
            .order_by(ExtractedEntityModel.confidence.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_domain_chunks(self, session: AsyncSession, document_id: UUID) -> list[Chunk]:
        """
        Rebuild pipeline Chunks of a document with their entities attached.

        Args:
            session: Async database session
            document_id: Owning document UUID

        Returns:
            list[Chunk]: Chunks in reading order
        """
        rows = await self.get_by_document(session, document_id)
        chunks = {row.id: row.to_domain() for row in rows}
        for entity_row in await self.get_entities_by_document(session, document_id):
            chunk = chunks.get(entity_row.chunk_id)
            if chunk is not None:
                chunk.entities.append(entity_row.to_domain())
        return list(chunks.values())


chunk_crud = ChunkCRUD()
