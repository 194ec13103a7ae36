"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from meeting_indexer.boundary.db.CRUD import chunk_crud, processing_task_crud

    chunks = await chunk_crud.get_by_document(db, document_id)
    stats = await processing_task_crud.count_by_status(db)
"""

from meeting_indexer.boundary.db.CRUD.base_crud import BaseCRUD
from meeting_indexer.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud
from meeting_indexer.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from meeting_indexer.boundary.db.CRUD.embedding_crud import (
    EmbeddedChunk,
    EmbeddingCRUD,
    SearchCandidate,
    embedding_crud,
)
from meeting_indexer.boundary.db.CRUD.processing_task_crud import (
    ProcessingTaskCRUD,
    processing_task_crud,
)
from meeting_indexer.boundary.db.CRUD.relationship_crud import (
    RelationshipCRUD,
    TimelineEventCRUD,
    relationship_crud,
    timeline_event_crud,
)

__all__ = [
    "BaseCRUD",
    "ChunkCRUD",
    "DocumentCRUD",
    "EmbeddedChunk",
    "EmbeddingCRUD",
    "ProcessingTaskCRUD",
    "RelationshipCRUD",
    "SearchCandidate",
    "TimelineEventCRUD",
    "chunk_crud",
    "document_crud",
    "embedding_crud",
    "processing_task_crud",
    "relationship_crud",
    "timeline_event_crud",
]
