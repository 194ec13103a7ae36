"""
Ingestion service.

Runs the chunking pipeline for one document and persists everything it
produces in a single transaction: chunks, entity rows, relationships,
timeline events, document aggregates and the vectorize task that hands
the document to the vectorization worker. The formatted result is then
archived to S3 on a best-effort basis.

Dependencies: sqlalchemy, meeting_indexer.core, meeting_indexer.boundary
System role: Write path from raw text to stored, queryable structure
"""

import asyncio
import logging
import time
from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from meeting_indexer.boundary.aws import S3ArchiveSink
from meeting_indexer.boundary.db.CRUD import (
    chunk_crud,
    document_crud,
    embedding_crud,
    processing_task_crud,
    relationship_crud,
    timeline_event_crud,
)
from meeting_indexer.boundary.db.document_status_updater import DocumentStatusUpdater
from meeting_indexer.boundary.db.models import DocumentStatus
from meeting_indexer.configs import QueueSettings
from meeting_indexer.core.entrypoint import ChunkingPipeline
from meeting_indexer.core.exceptions import DocumentProcessingError
from meeting_indexer.models import (
    ChunkingResult,
    DocumentKind,
    DocumentView,
    IngestionOutcome,
    VectorizePayload,
)
from meeting_indexer.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class IngestionService:
    """Persist pipeline output and enqueue vectorization."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        pipeline: ChunkingPipeline | None = None,
        archive: S3ArchiveSink | None = None,
        queue_settings: QueueSettings | None = None,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            session_factory: Async session factory for the relational store
            pipeline: Chunking pipeline (default settings if None)
            archive: S3 archive sink (archiving disabled if None)
            queue_settings: Default task priority (defaults if None)
        """
        self._session_factory = session_factory
        self._pipeline = pipeline or ChunkingPipeline()
        self._archive = archive
        self._queue_settings = queue_settings or QueueSettings()

    async def ingest(
        self,
        text: str,
        title: str,
        kind: DocumentKind = DocumentKind.DOCUMENT,
        source_ref: str | None = None,
        occurred_at: datetime | None = None,
        participants: list[str] | None = None,
        priority: int | None = None,
    ) -> IngestionOutcome:
        """
        Chunk, persist and enqueue one document.

        The document row is committed first with status PROCESSING so that a
        later failure can be recorded against it.

        Args:
            text: Raw transcript or document text
            title: Human-readable title
            kind: Document kind tag
            source_ref: Upstream reference for the raw text
            occurred_at: Meeting/document timestamp
            participants: Participant names known to the caller
            priority: Vectorize task priority (queue default if None)

        Returns:
            IngestionOutcome: Document and task ids with row counts

        Raises:
            DocumentProcessingError: Pipeline or persistence failed; the
                document is left FAILED with the error recorded
        """
        start_time = time.perf_counter()

        async with self._session_factory() as session:
            document = await document_crud.create(
                session,
                title=title,
                kind=kind,
                source_ref=source_ref,
                occurred_at=occurred_at,
                participants=participants or [],
                status=DocumentStatus.PROCESSING,
            )
            await session.commit()
            document_id = document.id

            try:
                result = await asyncio.to_thread(self._pipeline.process, text, kind, str(document_id))

                chunk_count, entity_count = await chunk_crud.create_with_entities(
                    session, document_id, result.chunks
                )
                relationship_count = await relationship_crud.create_from_domain(
                    session, document_id, result.relationships
                )
                await timeline_event_crud.create_from_domain(
                    session, document_id, result.metadata.timeline or []
                )
                await document_crud.store_aggregates(session, document_id, result)

                task = await processing_task_crud.enqueue(
                    session,
                    document_id,
                    VectorizePayload(document_id=str(document_id)),
                    priority=priority if priority is not None else self._queue_settings.default_priority,
                )
                await session.commit()
            except Exception as e:
                await session.rollback()
                log_exception_with_context(
                    logger,
                    f"{__name__}:ingest - Ingestion failed",
                    e,
                    document_id=document_id,
                    title=title,
                )
                await self._mark_failed(session, document_id, e)
                raise DocumentProcessingError(
                    f"Ingestion failed: {type(e).__name__}: {e}",
                    document_id=str(document_id),
                ) from e

        archived = await self._archive_result(title, result, occurred_at)
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            f"{__name__}:ingest - Document ingested",
            extra={
                "document_id": str(document_id),
                "task_id": str(task.id),
                "strategy": result.strategy.value,
                "chunk_count": chunk_count,
                "entity_count": entity_count,
                "relationship_count": relationship_count,
                "elapsed_ms": round(elapsed_ms, 2),
            },
        )

        return IngestionOutcome(
            document_id=document_id,
            task_id=task.id,
            chunk_count=chunk_count,
            entity_count=entity_count,
            relationship_count=relationship_count,
            archived=archived,
            processing_time_ms=elapsed_ms,
        )

    async def _mark_failed(self, session: AsyncSession, document_id: UUID, error: Exception) -> None:
        try:
            await DocumentStatusUpdater(session).mark_failed(
                document_id, f"{type(error).__name__}: {error}"
            )
        except Exception as mark_error:
            log_exception_with_context(
                logger,
                f"{__name__}:_mark_failed - Could not record failure on document",
                mark_error,
                document_id=document_id,
            )

    async def _archive_result(
        self,
        title: str,
        result: ChunkingResult,
        occurred_at: datetime | None,
    ) -> bool:
        if self._archive is None:
            return False
        payload = {
            "title": title,
            "occurred_at": occurred_at.isoformat() if occurred_at else None,
            **result.model_dump(mode="json"),
        }
        return await asyncio.to_thread(self._archive.archive, result.document_id, payload)

    async def get_document_view(self, document_id: UUID) -> DocumentView | None:
        """
        Read back the stored structure of a document.

        Works as soon as ingestion has committed; before the worker finishes,
        ``embedding_complete`` is False and ``embedded_chunk_count`` reflects
        the vectors stored so far.

        Args:
            document_id: Document UUID

        Returns:
            DocumentView if the document exists, None otherwise
        """
        async with self._session_factory() as session:
            document = await document_crud.get_by_id(session, document_id)
            if document is None:
                return None

            chunks = await chunk_crud.get_domain_chunks(session, document_id)
            relationships = await relationship_crud.get_by_document(session, document_id)
            timeline = await timeline_event_crud.get_by_document(session, document_id)
            embedded_count = await embedding_crud.count_by_document(session, document_id)

        return DocumentView(
            document_id=str(document.id),
            title=document.title,
            kind=document.kind,
            occurred_at=document.occurred_at,
            chunks=chunks,
            relationships=[row.to_domain() for row in relationships],
            timeline=[row.to_domain() for row in timeline],
            topics=list(document.topics or []),
            speakers=list(document.speakers or []),
            total_tokens=document.total_tokens,
            embedding_complete=document.vector_processed,
            embedded_chunk_count=embedded_count,
        )

    async def queue_stats(self) -> dict[str, int]:
        """Processing task counts by status."""
        async with self._session_factory() as session:
            return await processing_task_crud.count_by_status(session)
