"""
Vector index ORM model.

Denormalized search row per embedded chunk: enough document context to
render a hit without joining back to documents and chunks.

Dependencies: sqlalchemy, meeting_indexer.boundary.db.base
System role: Lookup table scanned by SearchService
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from meeting_indexer.boundary.db.base import Base, TimestampMixin, UUIDMixin

PREVIEW_LENGTH = 200


class VectorIndexModel(Base, UUIDMixin, TimestampMixin):
    """
    Vector index ORM model.

    Attributes:
        chunk_id: Embedded chunk (unique, cascade delete)
        document_id: Owning document
        parent_chunk_id: Section id for split sections
        title: Document title at embedding time
        occurred_at: Document timestamp
        chunk_preview: First 200 characters of the chunk
        relevance_score: Static ranking weight (1.0 on insert)
    """

    __tablename__ = "vector_index"

    chunk_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("chunks.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    parent_chunk_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    title: Mapped[str | None] = mapped_column(String(512), nullable=True)
    occurred_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    chunk_preview: Mapped[str] = mapped_column(String(PREVIEW_LENGTH), nullable=False)
    relevance_score: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)
