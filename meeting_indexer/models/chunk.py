"""
Chunk domain model for the segmentation pipeline.

Represents a contiguous span of source text with a deterministic ID,
ordering information, speaker/time data and attached entities.

Dependencies: pydantic
System role: Unit of embedding and retrieval
"""

import enum

from pydantic import BaseModel, Field

from meeting_indexer.models.entity import ExtractedEntity


class ChunkType(str, enum.Enum):
    """How a chunk was produced."""

    SPEAKER_TURN = "speaker_turn"
    TOPIC_SEGMENT = "topic_segment"
    SLIDING_WINDOW = "sliding_window"
    SUMMARY = "summary"


class Sentiment(str, enum.Enum):
    """Lexicon-based tone of a chunk carrying decisions or risks."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    MIXED = "mixed"


class Chunk(BaseModel):
    """Bounded span of source text with ordering and annotation fields."""

    id: str = Field(description="Deterministic chunk identifier (content hash)")
    document_id: str = Field(description="Owning document identifier")
    content: str = Field(description="Chunk text content")
    position: float = Field(description="Reading-order position; sub-chunks use fractions")
    sort_key: str = Field(description="Path-like ordering key, e.g. '000003' or '000003.0002'")
    type: ChunkType = Field(description="Segmentation strategy that produced the chunk")
    token_count: int = Field(ge=0, description="Estimated tokens (chars / 4, rounded up)")
    importance: float = Field(default=0.5, ge=0.0, le=1.0)
    topics: list[str] = Field(default_factory=list)
    entities: list[ExtractedEntity] = Field(default_factory=list)

    speaker: str | None = None
    start_time: float | None = Field(default=None, description="Seconds from start")
    end_time: float | None = Field(default=None, description="Seconds from start")
    sentiment: Sentiment | None = None

    previous_chunk_id: str | None = None
    next_chunk_id: str | None = None
    parent_chunk_id: str | None = Field(
        default=None,
        description="Synthetic section id for chunks split out of an oversized section",
    )
    context_before: str | None = None
    context_after: str | None = None
