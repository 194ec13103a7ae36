"""
Timeline event ORM model.

Dependencies: sqlalchemy, meeting_indexer.boundary.db.base
System role: Chronological decisions, action items, milestones and risks per document
"""

import uuid

from sqlalchemy import Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from meeting_indexer.boundary.db.base import Base, TimestampMixin, UUIDMixin, enum_column
from meeting_indexer.models import EntityType, TimelineEvent


class TimelineEventModel(Base, UUIDMixin, TimestampMixin):
    """
    Timeline event ORM model (generated id referencing document + chunk).

    Attributes:
        document_id: Owning document (cascade delete)
        chunk_id: Source chunk (cascade delete)
        event_type: decision, action_item, milestone or risk
        description: Entity value
        event_timestamp: Seconds from start, or chunk position
        confidence: Entity confidence
        assignee, due_date: Action item details when found
        status: Follow-up state for operators ("open" on creation)
    """

    __tablename__ = "timeline_events"

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    chunk_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("chunks.id", ondelete="CASCADE"),
        nullable=False,
    )
    event_type: Mapped[EntityType] = mapped_column(enum_column(EntityType), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    event_timestamp: Mapped[float] = mapped_column(Float, nullable=False)
    confidence: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)
    assignee: Mapped[str | None] = mapped_column(String(255), nullable=True)
    due_date: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="open")

    def to_domain(self) -> TimelineEvent:
        return TimelineEvent(
            timestamp=self.event_timestamp,
            type=self.event_type,
            description=self.description,
            source_chunk_id=self.chunk_id,
            confidence=self.confidence,
            assignee=self.assignee,
            due_date=self.due_date,
        )
