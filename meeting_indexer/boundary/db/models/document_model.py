"""
Document ORM model.

Represents an ingested transcript or business document together with the
aggregates rolled up by the chunking pipeline and its embedding state.

Dependencies: sqlalchemy, meeting_indexer.boundary.db.base
System role: Document persistence and processing status tracking
"""

import enum
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from meeting_indexer.boundary.db.base import Base, TimestampMixin, UUIDMixin, enum_column
from meeting_indexer.models import DocumentKind


class DocumentStatus(str, enum.Enum):
    """
    Structural processing lifecycle states.

    PENDING: Row created, chunking not started
    PROCESSING: Chunking pipeline running / results being persisted
    COMPLETED: Chunks, entities and relationships stored; readable
    FAILED: Processing error; error_message field contains details

    Embedding completion is tracked separately by ``vector_processed``.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model.

    Lifecycle: created (PROCESSING) -> chunks persisted (COMPLETED) or
    failure (FAILED). ``vector_processed`` flips to true once the
    vectorization worker has stored a vector for every chunk.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Human-readable title
        kind: Source kind (meeting, document, email, chat)
        source_ref: Upstream reference (object key, URL), optional
        occurred_at: Meeting/document timestamp from the source
        participants: Participant names supplied by the source
        status: Structural processing state
        strategy: Segmentation strategy that produced the chunks
        chunk_count, total_tokens: Aggregates from DocumentMetadata
        topics, speakers: Ordered unions over chunks
        entity_index: Entity type -> list of entity dicts
        summary: One-line digest
        vector_processed: True once every chunk has an embedding
        embedded_at: When vector_processed flipped
        error_message: Null unless FAILED (2048 char limit)
    """

    __tablename__ = "documents"

    title: Mapped[str] = mapped_column(String(512), nullable=False)

    kind: Mapped[DocumentKind] = mapped_column(
        enum_column(DocumentKind),
        nullable=False,
        default=DocumentKind.DOCUMENT,
    )

    source_ref: Mapped[str | None] = mapped_column(
        String(1024),
        nullable=True,
        doc="Upstream object key or URL for the raw text",
    )

    occurred_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    participants: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    status: Mapped[DocumentStatus] = mapped_column(
        enum_column(DocumentStatus),
        nullable=False,
        default=DocumentStatus.PENDING,
    )

    strategy: Mapped[str | None] = mapped_column(String(32), nullable=True)

    chunk_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_tokens: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    topics: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    speakers: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    entity_index: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)

    vector_processed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    embedded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    error_message: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        doc="Error details if processing failed",
    )

    chunks = relationship(
        "ChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
