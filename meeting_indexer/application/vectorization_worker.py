"""
Vectorization worker.

Drains the processing task queue: claims pending vectorize tasks, embeds
the chunks of each target document in provider-sized groups, stores the
vectors with their search-index rows and drives every task through its
state machine:

    pending --claim--> processing --success--> completed
    processing --failure, attempts < max--> pending (attempts + 1)
    processing --failure, attempts >= max--> failed (terminal)

Each task runs in its own session; a failing task never aborts its
siblings in the same batch.

Dependencies: sqlalchemy, meeting_indexer.boundary, numpy (via vector_codec)
System role: Embedding & indexing subsystem
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from meeting_indexer.application.vector_codec import encode_vector, vector_magnitude
from meeting_indexer.boundary.db.CRUD import (
    EmbeddedChunk,
    chunk_crud,
    document_crud,
    embedding_crud,
    processing_task_crud,
)
from meeting_indexer.boundary.db.document_status_updater import DocumentStatusUpdater
from meeting_indexer.boundary.db.models import ProcessingTaskModel
from meeting_indexer.boundary.embeddings import EmbeddingProvider
from meeting_indexer.configs import EmbeddingSettings, QueueSettings
from meeting_indexer.core.exceptions import (
    DocumentProcessingError,
    EmbeddingError,
    TaskNotFoundError,
    ValidationError,
)
from meeting_indexer.models import BatchReport, TaskStatus, parse_task_payload
from meeting_indexer.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


class TaskCancelled(Exception):
    """Raised between provider groups when cancellation was requested."""


class _ProviderThrottle:
    """Pause before every provider call except the first one of a batch."""

    def __init__(self, pause_seconds: float, sleep: Callable[[float], Awaitable[None]]) -> None:
        self._pause_seconds = pause_seconds
        self._sleep = sleep
        self.calls = 0

    async def wait(self) -> None:
        if self.calls and self._pause_seconds > 0:
            await self._sleep(self._pause_seconds)
        self.calls += 1


class VectorizationWorker:
    """Process vectorize tasks in bounded, rate-limited batches."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        provider: EmbeddingProvider,
        embedding_settings: EmbeddingSettings | None = None,
        queue_settings: QueueSettings | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialize worker.

        Args:
            session_factory: Async session factory for the relational store
            provider: Embedding provider
            embedding_settings: Group size and inter-call pause (defaults if None)
            queue_settings: Attempt bound and batch limit (defaults if None)
            sleep: Awaitable used for the inter-call pause
        """
        self._session_factory = session_factory
        self._provider = provider
        self._embedding_settings = embedding_settings or EmbeddingSettings()
        self._queue_settings = queue_settings or QueueSettings()
        self._sleep = sleep

    async def process_batch(
        self,
        limit: int | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> BatchReport:
        """
        Select, claim and run up to ``limit`` pending tasks.

        Tasks are taken by priority (desc) then age (asc). Tasks at or over
        the attempt bound are never selected. Cancellation is checked
        before each task and between provider groups; a task interrupted
        between groups goes back to pending without consuming an attempt.

        Args:
            limit: Maximum tasks to select (queue batch_limit if None)
            cancel_event: Cooperative cancellation flag

        Returns:
            BatchReport: Per-outcome counters for this call; empty when limit is 0

        Raises:
            ValidationError: limit is negative
        """
        if limit is None:
            limit = self._queue_settings.batch_limit
        if limit < 0:
            raise ValidationError(
                "limit must not be negative", field="limit", details={"limit": limit}
            )
        if limit == 0:
            return BatchReport()

        max_attempts = self._queue_settings.max_attempts
        report = BatchReport()
        throttle = _ProviderThrottle(self._embedding_settings.batch_pause_seconds, self._sleep)

        async with self._session_factory() as session:
            tasks = await processing_task_crud.select_pending(session, limit, max_attempts)
        report.selected = len(tasks)

        for task in tasks:
            if cancel_event is not None and cancel_event.is_set():
                report.cancelled = True
                break

            async with self._session_factory() as session:
                claimed = await processing_task_crud.claim(session, task.id, max_attempts)
                await session.commit()
            if not claimed:
                report.skipped += 1
                logger.info(
                    f"{__name__}:process_batch - Task claimed elsewhere",
                    extra={"task_id": str(task.id)},
                )
                continue

            try:
                embedded = await self._run_task(task, throttle, cancel_event)
            except TaskCancelled:
                await self._release(task.id)
                report.released += 1
                report.cancelled = True
                break
            except Exception as e:
                status = await self._record_failure(task, e)
                if status is TaskStatus.FAILED:
                    report.failed += 1
                elif status is TaskStatus.PENDING:
                    report.requeued += 1
                else:
                    report.skipped += 1
                continue

            report.completed += 1
            report.embedded_chunks += embedded

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:process_batch - Batch finished",
            **report.model_dump(),
        )
        return report

    async def _run_task(
        self,
        task: ProcessingTaskModel,
        throttle: _ProviderThrottle,
        cancel_event: asyncio.Event | None,
    ) -> int:
        payload = parse_task_payload(task.task_type, task.payload)
        document_id = UUID(payload.document_id)
        batch_size = self._embedding_settings.batch_size

        async with self._session_factory() as session:
            try:
                document = await document_crud.get_by_id(session, document_id)
                if document is None:
                    raise DocumentProcessingError(
                        "Target document not found",
                        document_id=payload.document_id,
                    )

                if payload.force:
                    chunks = await chunk_crud.get_by_document(session, document_id, payload.chunk_ids)
                else:
                    chunks = await chunk_crud.get_unembedded(session, document_id, payload.chunk_ids)

                embedded = 0
                for start in range(0, len(chunks), batch_size):
                    if start and cancel_event is not None and cancel_event.is_set():
                        raise TaskCancelled()

                    group = chunks[start : start + batch_size]
                    await throttle.wait()
                    vectors = await self._provider.embed([chunk.content for chunk in group])
                    if len(vectors) != len(group):
                        raise EmbeddingError(
                            "Provider returned a mismatched batch",
                            document_id=payload.document_id,
                            details={"requested": len(group), "received": len(vectors)},
                        )

                    embedded += await embedding_crud.store_group(
                        session,
                        document_id,
                        [
                            EmbeddedChunk(
                                chunk=chunk,
                                vector=encode_vector(vector),
                                dimension=len(vector),
                                magnitude=vector_magnitude(vector),
                            )
                            for chunk, vector in zip(group, vectors)
                        ],
                        model_name=self._provider.model_name,
                        title=document.title,
                        occurred_at=document.occurred_at,
                    )
                    await session.commit()

                remaining = await chunk_crud.get_unembedded(session, document_id)
                if not remaining:
                    await DocumentStatusUpdater(session).mark_embedding_complete(document_id)

                await processing_task_crud.mark_completed(session, task.id)
                await session.commit()
            except Exception:
                await session.rollback()
                raise

        logger.info(
            f"{__name__}:_run_task - Task completed",
            extra={
                "task_id": str(task.id),
                "document_id": payload.document_id,
                "embedded_chunks": embedded,
                "document_complete": not remaining,
            },
        )
        return embedded

    async def _release(self, task_id: UUID) -> None:
        async with self._session_factory() as session:
            await processing_task_crud.release(session, task_id)
            await session.commit()
        logger.info(
            f"{__name__}:_release - Task released after cancellation",
            extra={"task_id": str(task_id)},
        )

    async def _record_failure(self, task: ProcessingTaskModel, error: Exception) -> TaskStatus | None:
        log_exception_with_context(
            logger,
            f"{__name__}:_record_failure - Task attempt failed",
            error,
            task_id=task.id,
            target_id=task.target_id,
        )
        async with self._session_factory() as session:
            try:
                status = await processing_task_crud.record_failure(
                    session,
                    task.id,
                    f"{type(error).__name__}: {error}",
                    self._queue_settings.max_attempts,
                )
            except TaskNotFoundError:
                logger.warning(
                    f"{__name__}:_record_failure - Task vanished before failure was recorded",
                    extra={"task_id": str(task.id)},
                )
                return None
            await session.commit()

        logger.info(
            f"{__name__}:_record_failure - Task moved to {status.value}",
            extra={"task_id": str(task.id), "status": status.value},
        )
        return status
