"""
Processing task CRUD operations.

Queue operations for the vectorization worker: enqueue, selection of
runnable tasks, the atomic claim and the terminal/retry transitions.

Dependencies: sqlalchemy, meeting_indexer.boundary.db.models
System role: Durable work queue persistence
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from meeting_indexer.boundary.db.base import utcnow
from meeting_indexer.boundary.db.CRUD.base_crud import BaseCRUD
from meeting_indexer.boundary.db.models import ProcessingTaskModel
from meeting_indexer.core.exceptions import TaskNotFoundError
from meeting_indexer.models import TaskStatus, TaskType, VectorizePayload
from meeting_indexer.observability.log_utils import truncate_error


class ProcessingTaskCRUD(BaseCRUD[ProcessingTaskModel]):
    """
    CRUD operations for ProcessingTaskModel.

    State transitions are single UPDATE statements so that concurrent
    workers never both own a task.
    """

    def __init__(self) -> None:
        """Initialize ProcessingTaskCRUD with ProcessingTaskModel."""
        super().__init__(ProcessingTaskModel)

    async def enqueue(
        self,
        session: AsyncSession,
        document_id: UUID,
        payload: VectorizePayload | None = None,
        priority: int = 5,
        scheduled_for: datetime | None = None,
    ) -> ProcessingTaskModel:
        """
        Insert a PENDING vectorize task for a document.

        Args:
            session: Async database session
            document_id: Target document UUID
            payload: Task payload (all chunks of the document if None)
            priority: Higher runs first
            scheduled_for: Earliest run time (now if None)

        Returns:
            ProcessingTaskModel: Created task
        """
        payload = payload or VectorizePayload(document_id=str(document_id))
        return await self.create(
            session,
            target_id=document_id,
            task_type=TaskType(payload.task_type),
            payload=payload.model_dump(mode="json"),
            priority=priority,
            status=TaskStatus.PENDING,
            attempts=0,
            scheduled_for=scheduled_for or utcnow(),
        )

    async def select_pending(
        self,
        session: AsyncSession,
        limit: int,
        max_attempts: int,
        now: datetime | None = None,
    ) -> Sequence[ProcessingTaskModel]:
        """
        Select runnable tasks: highest priority first, then oldest.

        Args:
            session: Async database session
            limit: Maximum number of tasks to return
            max_attempts: Tasks at or above this attempt count are excluded
            now: Reference time for ``scheduled_for`` (utcnow if None)

        Returns:
            Sequence of PENDING ProcessingTaskModels
        """
        stmt = (
            select(ProcessingTaskModel)
            .where(ProcessingTaskModel.status == TaskStatus.PENDING)
            .where(ProcessingTaskModel.attempts < max_attempts)
            .where(ProcessingTaskModel.scheduled_for <= (now or utcnow()))
            .order_by(ProcessingTaskModel.priority.desc(), ProcessingTaskModel.created_at.asc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def claim(self, session: AsyncSession, id: UUID, max_attempts: int) -> bool:
        """
        Atomically move a task from PENDING to PROCESSING.

        Args:
            session: Async database session
            id: Task UUID
            max_attempts: Claim is refused once attempts reach this value

        Returns:
            True if this caller now owns the task, False if another worker won
        """
        stmt = (
            update(ProcessingTaskModel)
            .where(ProcessingTaskModel.id == id)
            .where(ProcessingTaskModel.status == TaskStatus.PENDING)
            .where(ProcessingTaskModel.attempts < max_attempts)
            .values(status=TaskStatus.PROCESSING, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount == 1

    async def mark_completed(self, session: AsyncSession, id: UUID) -> None:
        """Move a task to COMPLETED and stamp ``processed_at``."""
        now = utcnow()
        await session.execute(
            update(ProcessingTaskModel)
            .where(ProcessingTaskModel.id == id)
            .values(status=TaskStatus.COMPLETED, processed_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )

    async def release(self, session: AsyncSession, id: UUID) -> None:
        """Return a claimed task to PENDING without consuming an attempt."""
        await session.execute(
            update(ProcessingTaskModel)
            .where(ProcessingTaskModel.id == id)
            .where(ProcessingTaskModel.status == TaskStatus.PROCESSING)
            .values(status=TaskStatus.PENDING, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )

    async def record_failure(
        self,
        session: AsyncSession,
        id: UUID,
        error: str,
        max_attempts: int,
    ) -> TaskStatus:
        """
        Count a failed attempt and pick the next state.

        Args:
            session: Async database session
            id: Task UUID
            error: Failure message (truncated before storing)
            max_attempts: FAILED once attempts reach this value

        Returns:
            TaskStatus: FAILED when attempts are exhausted, else PENDING

        Raises:
            TaskNotFoundError: Task row no longer exists
        """
        result = await session.execute(
            select(ProcessingTaskModel.attempts).where(ProcessingTaskModel.id == id)
        )
        current = result.scalar_one_or_none()
        if current is None:
            raise TaskNotFoundError(str(id))

        attempts = current + 1
        status = TaskStatus.FAILED if attempts >= max_attempts else TaskStatus.PENDING
        await session.execute(
            update(ProcessingTaskModel)
            .where(ProcessingTaskModel.id == id)
            .values(
                status=status,
                attempts=attempts,
                last_error=truncate_error(error),
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        return status

    async def count_by_status(self, session: AsyncSession) -> dict[str, int]:
        """
        Queue statistics for operators.

        Returns:
            dict: Status value -> task count (every status present)
        """
        result = await session.execute(
            select(ProcessingTaskModel.status, func.count()).group_by(ProcessingTaskModel.status)
        )
        counts = {status.value: 0 for status in TaskStatus}
        for status, count in result.all():
            counts[TaskStatus(status).value] = count
        return counts


processing_task_crud = ProcessingTaskCRUD()
