"""
Chunk embedding ORM model.

Dependencies: sqlalchemy, meeting_indexer.boundary.db.base
System role: Storage of float32 vector blobs with precomputed magnitudes
"""

import uuid

from sqlalchemy import Float, ForeignKey, Integer, LargeBinary, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from meeting_indexer.boundary.db.base import Base, TimestampMixin


class ChunkEmbeddingModel(Base, TimestampMixin):
    """
    One vector per chunk.

    Attributes:
        chunk_id: Embedded chunk (primary key, cascade delete)
        document_id: Owning document
        vector: Packed float32 values in native byte order
        dimension: Number of float32 values in ``vector``
        magnitude: Euclidean norm, reused by cosine similarity
        model_name: Provider model that produced the vector
    """

    __tablename__ = "chunk_embeddings"

    chunk_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("chunks.id", ondelete="CASCADE"),
        primary_key=True,
    )
    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    vector: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    dimension: Mapped[int] = mapped_column(Integer, nullable=False)
    magnitude: Mapped[float] = mapped_column(Float, nullable=False)
    model_name: Mapped[str] = mapped_column(String(255), nullable=False)
