"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(): Async connection management
  - DocumentModel, ChunkModel, ProcessingTaskModel, ...: Persisted entities
  - DocumentStatusUpdater: Raw-SQL document state transitions
  - document_crud, chunk_crud, processing_task_crud, ...: CRUD operation singletons

Dependencies: sqlalchemy, meeting_indexer.configs
System role: Database adapter for documents, chunks, the chunk graph,
vectors and the processing task queue.
"""

from meeting_indexer.boundary.db.base import Base, TimestampMixin, UUIDMixin
from meeting_indexer.boundary.db.connection import get_async_engine, get_async_session_factory
from meeting_indexer.boundary.db.CRUD import (
    BaseCRUD,
    chunk_crud,
    document_crud,
    embedding_crud,
    processing_task_crud,
    relationship_crud,
    timeline_event_crud,
)
from meeting_indexer.boundary.db.document_status_updater import DocumentStatusUpdater
from meeting_indexer.boundary.db.models import (
    ChunkEmbeddingModel,
    ChunkModel,
    ChunkRelationshipModel,
    DocumentModel,
    DocumentStatus,
    ExtractedEntityModel,
    ProcessingTaskModel,
    TimelineEventModel,
    VectorIndexModel,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "ChunkEmbeddingModel",
    "ChunkModel",
    "ChunkRelationshipModel",
    "DocumentModel",
    "DocumentStatus",
    "ExtractedEntityModel",
    "ProcessingTaskModel",
    "TimelineEventModel",
    "VectorIndexModel",
    # Status transitions
    "DocumentStatusUpdater",
    # CRUD
    "BaseCRUD",
    "chunk_crud",
    "document_crud",
    "embedding_crud",
    "processing_task_crud",
    "relationship_crud",
    "timeline_event_crud",
]
