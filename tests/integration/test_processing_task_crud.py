"""
Integration tests for the processing task queue on SQLite.

System role: Verification of claim exclusivity and retry transitions
"""

import uuid

import pytest

from meeting_indexer.boundary.db.CRUD import processing_task_crud
from meeting_indexer.core.exceptions import TaskNotFoundError
from meeting_indexer.models import TaskStatus, VectorizePayload


@pytest.mark.asyncio
async def test_enqueue_defaults(seed_document, session_factory):
    document_id, task_id, _ = await seed_document(chunk_count=1)

    async with session_factory() as session:
        task = await processing_task_crud.get_by_id(session, task_id)

    assert task.status is TaskStatus.PENDING
    assert task.attempts == 0
    assert task.priority == 5
    assert task.target_id == document_id
    assert VectorizePayload.model_validate(task.payload).document_id == str(document_id)


@pytest.mark.asyncio
async def test_claim_is_exclusive(seed_document, session_factory):
    """Test a second claim of the same task loses."""
    _, task_id, _ = await seed_document(chunk_count=1)

    async with session_factory() as session:
        first = await processing_task_crud.claim(session, task_id, max_attempts=3)
        await session.commit()
    async with session_factory() as session:
        second = await processing_task_crud.claim(session, task_id, max_attempts=3)
        await session.commit()
        task = await processing_task_crud.get_by_id(session, task_id)

    assert first is True
    assert second is False
    assert task.status is TaskStatus.PROCESSING


@pytest.mark.asyncio
async def test_select_pending_orders_by_priority_then_age(seed_document, session_factory):
    _, low, _ = await seed_document(chunk_count=1, priority=1)
    _, high, _ = await seed_document(chunk_count=1, priority=9)
    _, mid_old, _ = await seed_document(chunk_count=1, priority=5)
    _, mid_new, _ = await seed_document(chunk_count=1, priority=5)

    async with session_factory() as session:
        tasks = await processing_task_crud.select_pending(session, limit=10, max_attempts=3)

    assert [task.id for task in tasks] == [high, mid_old, mid_new, low]


@pytest.mark.asyncio
async def test_select_pending_respects_limit_and_claims(seed_document, session_factory):
    _, claimed, _ = await seed_document(chunk_count=1, priority=9)
    await seed_document(chunk_count=1)
    await seed_document(chunk_count=1)

    async with session_factory() as session:
        await processing_task_crud.claim(session, claimed, max_attempts=3)
        await session.commit()
        tasks = await processing_task_crud.select_pending(session, limit=1, max_attempts=3)

    assert len(tasks) == 1
    assert tasks[0].id != claimed


@pytest.mark.asyncio
async def test_record_failure_transitions(seed_document, session_factory):
    """Test PENDING with an incremented count, then FAILED at the bound."""
    _, task_id, _ = await seed_document(chunk_count=1)

    async with session_factory() as session:
        first = await processing_task_crud.record_failure(session, task_id, "boom " * 1000, max_attempts=2)
        await session.commit()
        second = await processing_task_crud.record_failure(session, task_id, "boom again", max_attempts=2)
        await session.commit()

    async with session_factory() as session:
        task = await processing_task_crud.get_by_id(session, task_id)
        runnable = await processing_task_crud.select_pending(session, limit=10, max_attempts=2)
        claimed = await processing_task_crud.claim(session, task_id, max_attempts=2)

    assert first is TaskStatus.PENDING
    assert second is TaskStatus.FAILED
    assert task.attempts == 2
    assert task.last_error == "boom again"
    assert runnable == []
    assert claimed is False


@pytest.mark.asyncio
async def test_record_failure_unknown_task(test_async_db):
    with pytest.raises(TaskNotFoundError):
        await processing_task_crud.record_failure(test_async_db, uuid.uuid4(), "boom", max_attempts=3)


@pytest.mark.asyncio
async def test_release_returns_claim_without_attempt(seed_document, session_factory):
    _, task_id, _ = await seed_document(chunk_count=1)

    async with session_factory() as session:
        await processing_task_crud.claim(session, task_id, max_attempts=3)
        await processing_task_crud.release(session, task_id)
        await session.commit()
        task = await processing_task_crud.get_by_id(session, task_id)

    assert task.status is TaskStatus.PENDING
    assert task.attempts == 0


@pytest.mark.asyncio
async def test_count_by_status(seed_document, session_factory):
    _, completed, _ = await seed_document(chunk_count=1)
    await seed_document(chunk_count=1)

    async with session_factory() as session:
        await processing_task_crud.mark_completed(session, completed)
        await session.commit()
        counts = await processing_task_crud.count_by_status(session)

    assert counts == {"pending": 1, "processing": 0, "completed": 1, "failed": 0}
