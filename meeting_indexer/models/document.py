"""
Document-level domain models.

Structure detection output, timeline events and the aggregate metadata
rolled up from chunks, plus the read model returned to consumers.

Dependencies: pydantic
System role: Document summaries produced by the chunking pipeline
"""

import enum
from datetime import datetime

from pydantic import BaseModel, Field

from meeting_indexer.models.chunk import Chunk
from meeting_indexer.models.entity import EntityType, ExtractedEntity
from meeting_indexer.models.relationship import ChunkRelationship


class DocumentKind(str, enum.Enum):
    """Caller-supplied source kind; drives segmentation strategy choice."""

    MEETING = "meeting"
    DOCUMENT = "document"
    EMAIL = "email"
    CHAT = "chat"


class DocumentStructure(BaseModel):
    """Structure detector output."""

    has_speakers: bool = False
    has_headers: bool = False
    headers: list[str] = Field(default_factory=list)


class TimelineEvent(BaseModel):
    """Notable event derived from a decision, action item, milestone or risk."""

    timestamp: float = Field(description="Chunk start time in seconds, else chunk position")
    type: EntityType
    description: str
    source_chunk_id: str
    confidence: float = Field(default=1.0, gt=0.0, le=1.0)
    assignee: str | None = None
    due_date: str | None = None


class DocumentMetadata(BaseModel):
    """Aggregate summary of one processed document."""

    total_tokens: int = 0
    chunk_count: int = 0
    entities: dict[EntityType, list[ExtractedEntity]] = Field(default_factory=dict)
    topics: list[str] = Field(default_factory=list)
    speakers: list[str] | None = None
    timeline: list[TimelineEvent] | None = None
    summary: str | None = None


class DocumentView(BaseModel):
    """
    Structural read model for a stored document.

    Available as soon as ingestion commits; ``embedding_complete`` turns
    true asynchronously once the vectorization worker finishes.
    """

    document_id: str
    title: str
    kind: DocumentKind
    occurred_at: datetime | None = None
    chunks: list[Chunk] = Field(default_factory=list)
    relationships: list[ChunkRelationship] = Field(default_factory=list)
    timeline: list[TimelineEvent] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    speakers: list[str] = Field(default_factory=list)
    total_tokens: int = 0
    embedding_complete: bool = False
    embedded_chunk_count: int = 0
