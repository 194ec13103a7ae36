"""
Vectorization worker process.

Polls the processing task queue and runs ``process_batch`` until SIGINT
or SIGTERM. An empty poll waits ``poll_interval_seconds`` before the next
one, as does a batch that completed nothing; a productive batch is
followed immediately by another poll.

Dependencies: meeting_indexer.application, meeting_indexer.boundary
System role: Deployable entry point for the embedding & indexing subsystem

Usage:
    python -m meeting_indexer.workers.vectorize
"""

import asyncio
import contextlib
import signal

from meeting_indexer.application.vectorization_worker import VectorizationWorker
from meeting_indexer.boundary.db.connection import get_async_engine, get_async_session_factory
from meeting_indexer.boundary.embeddings.google_provider import GoogleEmbeddingProvider
from meeting_indexer.configs import get_settings
from meeting_indexer.observability import configure_logging, get_logger

logger = get_logger(__name__)


async def run_worker(
    worker: VectorizationWorker,
    poll_interval: float,
    stop_event: asyncio.Event,
) -> int:
    """
    Run batches until ``stop_event`` is set.

    Args:
        worker: Configured vectorization worker
        poll_interval: Seconds to wait after an empty poll
        stop_event: Set to stop; also passed to ``process_batch`` as its cancel flag

    Returns:
        int: Number of batches run
    """
    batches = 0
    while not stop_event.is_set():
        report = await worker.process_batch(cancel_event=stop_event)
        batches += 1
        if report.completed:
            continue
        with contextlib.suppress(asyncio.TimeoutError):
            await asyncio.wait_for(stop_event.wait(), timeout=poll_interval)

    logger.info(f"{__name__}:run_worker - Worker stopped", extra={"batches": batches})
    return batches


async def _serve() -> None:
    settings = get_settings()
    engine = get_async_engine(settings.database)
    worker = VectorizationWorker(
        session_factory=get_async_session_factory(engine),
        provider=GoogleEmbeddingProvider(settings.embedding),
        embedding_settings=settings.embedding,
        queue_settings=settings.queue,
    )

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop_event.set)

    logger.info(
        f"{__name__}:_serve - Worker starting",
        extra={"environment": settings.environment, "batch_limit": settings.queue.batch_limit},
    )
    try:
        await run_worker(worker, settings.queue.poll_interval_seconds, stop_event)
    finally:
        await engine.dispose()


def main() -> None:
    configure_logging(get_settings().log_level)
    asyncio.run(_serve())


if __name__ == "__main__":
    main()
