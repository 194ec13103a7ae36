"""Domain models shared by the pipeline, services and worker."""

from meeting_indexer.models.chunk import Chunk, ChunkType, Sentiment
from meeting_indexer.models.document import (
    DocumentKind,
    DocumentMetadata,
    DocumentStructure,
    DocumentView,
    TimelineEvent,
)
from meeting_indexer.models.entity import TIMELINE_ENTITY_TYPES, EntityType, ExtractedEntity
from meeting_indexer.models.pipeline_result import ChunkingResult, ChunkingStrategy, IngestionOutcome
from meeting_indexer.models.relationship import ChunkRelationship, RelationshipType
from meeting_indexer.models.search import SearchHit
from meeting_indexer.models.task import (
    BatchReport,
    TaskStatus,
    TaskType,
    VectorizePayload,
    parse_task_payload,
)

__all__ = [
    "BatchReport",
    "Chunk",
    "ChunkRelationship",
    "ChunkType",
    "ChunkingResult",
    "ChunkingStrategy",
    "DocumentKind",
    "DocumentMetadata",
    "DocumentStructure",
    "DocumentView",
    "EntityType",
    "ExtractedEntity",
    "IngestionOutcome",
    "RelationshipType",
    "SearchHit",
    "Sentiment",
    "TIMELINE_ENTITY_TYPES",
    "TaskStatus",
    "TaskType",
    "TimelineEvent",
    "VectorizePayload",
    "parse_task_payload",
]
