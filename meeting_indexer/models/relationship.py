"""
Chunk relationship domain model.

Dependencies: pydantic
System role: Directed, typed, weighted edges of the chunk graph
"""

import enum

from pydantic import BaseModel, Field


class RelationshipType(str, enum.Enum):
    """
    Edge categories.

    SEQUENTIAL: chunk i -> i+1, weight 1.0
    TOPIC_CONTINUATION: topic-set Jaccard similarity above threshold
    SPEAKER_CONTINUATION: both chunks spoken by the same speaker, weight 0.8
    ENTITY_REFERENCE: shared entities, weight min(1, 0.3 * shared)
    """

    SEQUENTIAL = "sequential"
    TOPIC_CONTINUATION = "topic_continuation"
    SPEAKER_CONTINUATION = "speaker_continuation"
    ENTITY_REFERENCE = "entity_reference"


class ChunkRelationship(BaseModel):
    """Directed edge between two chunks of the same document."""

    from_chunk_id: str
    to_chunk_id: str
    type: RelationshipType
    strength: float = Field(ge=0.0, le=1.0)

    @property
    def key(self) -> tuple[str, str, RelationshipType]:
        return self.from_chunk_id, self.to_chunk_id, self.type
