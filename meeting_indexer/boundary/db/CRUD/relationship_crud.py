"""
Relationship and timeline CRUD operations.

Dependencies: sqlalchemy, meeting_indexer.boundary.db.models
System role: Persistence of the chunk graph and document timelines
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from meeting_indexer.boundary.db.CRUD.base_crud import BaseCRUD
from meeting_indexer.boundary.db.models import ChunkRelationshipModel, TimelineEventModel
from meeting_indexer.models import ChunkRelationship, TimelineEvent


class RelationshipCRUD(BaseCRUD[ChunkRelationshipModel]):
    """CRUD operations for ChunkRelationshipModel."""

    def __init__(self) -> None:
        """Initialize RelationshipCRUD with ChunkRelationshipModel."""
        super().__init__(ChunkRelationshipModel)

    async def create_from_domain(
        self,
        session: AsyncSession,
        document_id: UUID,
        relationships: Sequence[ChunkRelationship],
    ) -> int:
        """
        Insert one row per unique (from, to, type) edge.

        Args:
            session: Async database session
            document_id: Owning document UUID
            relationships: Edges built by the relationship builder

        Returns:
            int: Rows inserted
        """
        rows: dict[tuple, ChunkRelationshipModel] = {}
        for relationship in relationships:
            rows.setdefault(
                relationship.key,
                ChunkRelationshipModel(
                    document_id=document_id,
                    from_chunk_id=relationship.from_chunk_id,
                    to_chunk_id=relationship.to_chunk_id,
                    relationship_type=relationship.type,
                    strength=relationship.strength,
                ),
            )
        if not rows:
            return 0
        return await self.create_many(session, list(rows.values()))

    async def get_by_document(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[ChunkRelationshipModel]:
        stmt = (
            select(ChunkRelationshipModel)
            .where(ChunkRelationshipModel.document_id == document_id)
            .order_by(ChunkRelationshipModel.created_at)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


class TimelineEventCRUD(BaseCRUD[TimelineEventModel]):
    """CRUD operations for TimelineEventModel."""

    def __init__(self) -> None:
        """Initialize TimelineEventCRUD with TimelineEventModel."""
        super().__init__(TimelineEventModel)

    async def create_from_domain(
        self,
        session: AsyncSession,
        document_id: UUID,
        events: Sequence[TimelineEvent],
    ) -> int:
        """Insert timeline events; each row gets a generated id."""
        if not events:
            return 0
        return await self.create_many(
            session,
            [
                TimelineEventModel(
                    document_id=document_id,
                    chunk_id=event.source_chunk_id,
                    event_type=event.type,
                    description=event.description,
                    event_timestamp=event.timestamp,
                    confidence=event.confidence,
                    assignee=event.assignee,
                    due_date=event.due_date,
                )
                for event in events
            ],
        )

    async def get_by_document(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[TimelineEventModel]:
        """Retrieve timeline events of a document in chronological order."""
        stmt = (
            select(TimelineEventModel)
            .where(TimelineEventModel.document_id == document_id)
            .order_by(TimelineEventModel.event_timestamp)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


relationship_crud = RelationshipCRUD()
timeline_event_crud = TimelineEventCRUD()
