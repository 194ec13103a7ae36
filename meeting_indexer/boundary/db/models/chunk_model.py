"""
Chunk ORM model.

Stores every Chunk field produced by the segmentation engine. The primary
key is the deterministic content hash, so re-persisting the same chunk is
detectable.

Dependencies: sqlalchemy, meeting_indexer.boundary.db.base
System role: Chunk persistence keyed by chunk id
"""

import uuid

from sqlalchemy import JSON, Float, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from meeting_indexer.boundary.db.base import Base, TimestampMixin, enum_column
from meeting_indexer.models import Chunk, ChunkType, Sentiment


class ChunkModel(Base, TimestampMixin):
    """
    Chunk ORM model.

    Attributes:
        id: Deterministic 16-hex chunk id (primary key)
        document_id: Owning document (cascade delete)
        position: Float reading-order position
        sort_key: Path-like ordering key
        chunk_type: Strategy that produced the chunk
        content: Chunk text
        speaker, start_time, end_time: Transcript turn data
        token_count, importance, sentiment, topics: Chunk annotations
        parent_chunk_id: Synthetic section id for split sections
        previous_chunk_id, next_chunk_id: Reading-order links
        context_before, context_after: Neighbor snippets
    """

    __tablename__ = "chunks"
    __table_args__ = (Index("ix_chunks_document_position", "document_id", "position"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True)

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
    )

    position: Mapped[float] = mapped_column(Float, nullable=False)
    sort_key: Mapped[str] = mapped_column(String(64), nullable=False)
    chunk_type: Mapped[ChunkType] = mapped_column(enum_column(ChunkType), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    speaker: Mapped[str | None] = mapped_column(String(255), nullable=True)
    start_time: Mapped[float | None] = mapped_column(Float, nullable=True)
    end_time: Mapped[float | None] = mapped_column(Float, nullable=True)

    token_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    importance: Mapped[float] = mapped_column(Float, nullable=False, default=0.5)
    sentiment: Mapped[Sentiment | None] = mapped_column(enum_column(Sentiment), nullable=True)
    topics: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    parent_chunk_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    previous_chunk_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    next_chunk_id: Mapped[str | None] = mapped_column(String(32), nullable=True)

    context_before: Mapped[str | None] = mapped_column(Text, nullable=True)
    context_after: Mapped[str | None] = mapped_column(Text, nullable=True)

    document = relationship("DocumentModel", back_populates="chunks")

    @classmethod
    def from_domain(cls, chunk: Chunk, document_id: uuid.UUID) -> "ChunkModel":
        """Build a row from a pipeline Chunk."""
        return cls(
            id=chunk.id,
            document_id=document_id,
            position=chunk.position,
            sort_key=chunk.sort_key,
            chunk_type=chunk.type,
            content=chunk.content,
            speaker=chunk.speaker,
            start_time=chunk.start_time,
            end_time=chunk.end_time,
            token_count=chunk.token_count,
            importance=chunk.importance,
            sentiment=chunk.sentiment,
            topics=list(chunk.topics),
            parent_chunk_id=chunk.parent_chunk_id,
            previous_chunk_id=chunk.previous_chunk_id,
            next_chunk_id=chunk.next_chunk_id,
            context_before=chunk.context_before,
            context_after=chunk.context_after,
        )

    def to_domain(self) -> Chunk:
        """Rebuild the pipeline Chunk (entities are loaded separately)."""
        return Chunk(
            id=self.id,
            document_id=str(self.document_id),
            content=self.content,
            position=self.position,
            sort_key=self.sort_key,
            type=self.chunk_type,
            token_count=self.token_count,
            importance=self.importance,
            topics=list(self.topics or []),
            speaker=self.speaker,
            start_time=self.start_time,
            end_time=self.end_time,
            sentiment=self.sentiment,
            previous_chunk_id=self.previous_chunk_id,
            next_chunk_id=self.next_chunk_id,
            parent_chunk_id=self.parent_chunk_id,
            context_before=self.context_before,
            context_after=self.context_after,
        )
