"""
ORM models.

Importing this package registers every table with ``Base.metadata``.
"""

from meeting_indexer.boundary.db.models.chunk_model import ChunkModel
from meeting_indexer.boundary.db.models.document_model import DocumentModel, DocumentStatus
from meeting_indexer.boundary.db.models.embedding_model import ChunkEmbeddingModel
from meeting_indexer.boundary.db.models.entity_model import ExtractedEntityModel
from meeting_indexer.boundary.db.models.processing_task_model import ProcessingTaskModel
from meeting_indexer.boundary.db.models.relationship_model import ChunkRelationshipModel
from meeting_indexer.boundary.db.models.timeline_event_model import TimelineEventModel
from meeting_indexer.boundary.db.models.vector_index_model import PREVIEW_LENGTH, VectorIndexModel

__all__ = [
    "ChunkEmbeddingModel",
    "ChunkModel",
    "ChunkRelationshipModel",
    "DocumentModel",
    "DocumentStatus",
    "ExtractedEntityModel",
    "PREVIEW_LENGTH",
    "ProcessingTaskModel",
    "TimelineEventModel",
    "VectorIndexModel",
]
