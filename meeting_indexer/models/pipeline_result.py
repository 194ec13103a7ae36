"""
Pipeline result models.

Dependencies: pydantic
System role: Return types for ChunkingPipeline.process() and IngestionService.ingest()
"""

import enum
from uuid import UUID

from pydantic import BaseModel, Field

from meeting_indexer.models.chunk import Chunk
from meeting_indexer.models.document import DocumentKind, DocumentMetadata
from meeting_indexer.models.relationship import ChunkRelationship


class ChunkingStrategy(str, enum.Enum):
    """Segmentation strategy selected for a document."""

    SPEAKER_AWARE = "speaker_aware"
    TOPIC_AWARE = "topic_aware"
    SLIDING_WINDOW = "sliding_window"
    NONE = "none"


class ChunkingResult(BaseModel):
    """Result of running the chunking pipeline over one document."""

    document_id: str = Field(description="Unique document identifier")
    kind: DocumentKind
    strategy: ChunkingStrategy
    chunks: list[Chunk] = Field(default_factory=list)
    relationships: list[ChunkRelationship] = Field(default_factory=list)
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    processing_time_ms: float = Field(default=0.0, description="Pipeline wall time in milliseconds")


class IngestionOutcome(BaseModel):
    """Result of persisting a document and enqueueing its vectorization."""

    document_id: UUID
    task_id: UUID
    chunk_count: int
    entity_count: int
    relationship_count: int
    archived: bool = False
    processing_time_ms: float = 0.0
