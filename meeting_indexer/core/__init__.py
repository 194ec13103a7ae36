"""
Core business logic module.

Contains the pure chunking pipeline (structure detection, segmentation,
entity extraction, relationship building, metadata aggregation) and the
exception hierarchy. Nothing here performs I/O.
"""

from meeting_indexer.core.exceptions import (
    ArchiveError,
    ConfigurationError,
    DocumentProcessingError,
    EmbeddingError,
    EntityExtractionError,
    MeetingIndexerError,
    TaskNotFoundError,
    ValidationError,
    VectorStoreError,
)

__all__ = [
    "ArchiveError",
    "ConfigurationError",
    "DocumentProcessingError",
    "EmbeddingError",
    "EntityExtractionError",
    "MeetingIndexerError",
    "TaskNotFoundError",
    "ValidationError",
    "VectorStoreError",
]
