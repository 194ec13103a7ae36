"""
Chunk relationship ORM model.

Dependencies: sqlalchemy, meeting_indexer.boundary.db.base
System role: Persistence of the chunk graph
"""

import uuid

from sqlalchemy import Float, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from meeting_indexer.boundary.db.base import Base, TimestampMixin, UUIDMixin, enum_column
from meeting_indexer.models import ChunkRelationship, RelationshipType


class ChunkRelationshipModel(Base, UUIDMixin, TimestampMixin):
    """
    Directed, typed, weighted edge between two chunks.

    Constraints:
        (from_chunk_id, to_chunk_id, relationship_type): UNIQUE
    """

    __tablename__ = "chunk_relationships"
    __table_args__ = (
        UniqueConstraint(
            "from_chunk_id",
            "to_chunk_id",
            "relationship_type",
            name="uq_chunk_relationship",
        ),
    )

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    from_chunk_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("chunks.id", ondelete="CASCADE"),
        nullable=False,
    )
    to_chunk_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("chunks.id", ondelete="CASCADE"),
        nullable=False,
    )
    relationship_type: Mapped[RelationshipType] = mapped_column(
        enum_column(RelationshipType),
        nullable=False,
    )
    strength: Mapped[float] = mapped_column(Float, nullable=False)

    def to_domain(self) -> ChunkRelationship:
        return ChunkRelationship(
            from_chunk_id=self.from_chunk_id,
            to_chunk_id=self.to_chunk_id,
            type=self.relationship_type,
            strength=self.strength,
        )
