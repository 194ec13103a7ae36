"""
Extracted entity ORM model.

One row per (chunk, entity type, entity value): entities are stored only
as annotations of the chunks that contain them.

Dependencies: sqlalchemy, meeting_indexer.boundary.db.base
System role: Entity persistence for lookup by type and by chunk
"""

import uuid

from sqlalchemy import JSON, Float, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from meeting_indexer.boundary.db.base import Base, TimestampMixin, UUIDMixin, enum_column
from meeting_indexer.models import EntityType, ExtractedEntity


class ExtractedEntityModel(Base, UUIDMixin, TimestampMixin):
    """
    Extracted entity ORM model.

    Attributes:
        chunk_id: Annotated chunk (cascade delete)
        document_id: Owning document (cascade delete)
        entity_type: Entity category
        entity_value: Matched value
        confidence: Rule confidence in (0, 1]
        context: Text window around the first match
        source_position: Character offset of the first match
        details: Type-specific extras (assignee/due_date for action items)

    Constraints:
        (chunk_id, entity_type, entity_value): UNIQUE
    """

    __tablename__ = "extracted_entities"
    __table_args__ = (
        UniqueConstraint("chunk_id", "entity_type", "entity_value", name="uq_entity_chunk_type_value"),
    )

    chunk_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("chunks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    entity_type: Mapped[EntityType] = mapped_column(enum_column(EntityType), nullable=False)
    entity_value: Mapped[str] = mapped_column(Text, nullable=False)
    confidence: Mapped[float] = mapped_column(Float, nullable=False)
    context: Mapped[str | None] = mapped_column(Text, nullable=True)
    source_position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    details: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    def to_domain(self) -> ExtractedEntity:
        return ExtractedEntity(
            type=self.entity_type,
            value=self.entity_value,
            confidence=self.confidence,
            source_position=self.source_position,
            context_window=self.context or "",
        )
