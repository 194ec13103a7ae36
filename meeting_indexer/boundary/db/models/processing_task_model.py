"""
Processing task ORM model.

Durable queue row for deferred work. Producers insert PENDING rows; the
vectorization worker claims them with a conditional update and drives
them to COMPLETED or FAILED.

Dependencies: sqlalchemy, meeting_indexer.boundary.db.base
System role: Work queue for embedding generation
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from meeting_indexer.boundary.db.base import Base, TimestampMixin, UUIDMixin, enum_column, utcnow
from meeting_indexer.models import TaskStatus, TaskType


class ProcessingTaskModel(Base, UUIDMixin, TimestampMixin):
    """
    Processing task ORM model.

    Lifecycle: PENDING -> PROCESSING -> COMPLETED, or back to PENDING on a
    retryable failure until ``attempts`` reaches the configured maximum,
    then FAILED.

    Attributes:
        target_id: Document the task operates on (cascade delete)
        task_type: Payload discriminator
        payload: JSON payload validated by the registered model
        priority: Higher runs first (default 5)
        status: Queue state
        attempts: Failed attempts so far
        last_error: Most recent failure message (truncated)
        scheduled_for: Not selectable before this time
        processed_at: Set on completion
    """

    __tablename__ = "processing_tasks"
    __table_args__ = (
        Index("ix_processing_tasks_queue", "status", "priority", "created_at"),
    )

    target_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    task_type: Mapped[TaskType] = mapped_column(
        enum_column(TaskType),
        nullable=False,
        default=TaskType.VECTORIZE,
    )
    payload: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    status: Mapped[TaskStatus] = mapped_column(
        enum_column(TaskStatus),
        nullable=False,
        default=TaskStatus.PENDING,
    )
    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_error: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    scheduled_for: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
