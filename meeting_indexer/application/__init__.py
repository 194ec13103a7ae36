"""
Application layer.

Services that combine the pure chunking pipeline with the storage,
archive and embedding boundaries.
"""

from meeting_indexer.application.ingestion_service import IngestionService
from meeting_indexer.application.search_service import SearchService
from meeting_indexer.application.vectorization_worker import VectorizationWorker

__all__ = ["IngestionService", "SearchService", "VectorizationWorker"]
