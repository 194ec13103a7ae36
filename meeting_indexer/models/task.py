"""
Processing task payload models.

Each task type carries its own payload model; the registry maps a stored
``task_type`` back to the model used to parse the JSON payload column.

Dependencies: pydantic
System role: Typed queue payloads for the vectorization worker
"""

import enum
from typing import Literal

from pydantic import BaseModel, Field


class TaskType(str, enum.Enum):
    """Queue task categories."""

    VECTORIZE = "vectorize"


class TaskStatus(str, enum.Enum):
    """
    Processing task lifecycle states.

    PENDING: Waiting for a worker claim (initial state, and after a retryable failure)
    PROCESSING: Claimed by exactly one worker
    COMPLETED: Terminal success
    FAILED: Terminal; attempts reached the configured maximum
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class VectorizePayload(BaseModel):
    """Embed the chunks of one document."""

    task_type: Literal["vectorize"] = "vectorize"
    document_id: str
    chunk_ids: list[str] | None = Field(
        default=None,
        description="Restrict to these chunks; None means every chunk of the document",
    )
    force: bool = Field(default=False, description="Re-embed chunks that already have vectors")


TaskPayload = VectorizePayload

PAYLOAD_MODELS: dict[TaskType, type[BaseModel]] = {
    TaskType.VECTORIZE: VectorizePayload,
}


def parse_task_payload(task_type: TaskType | str, data: dict) -> TaskPayload:
    """
    Parse a stored payload into the model registered for its task type.

    Args:
        task_type: Task type of the owning row
        data: Raw JSON payload

    Returns:
        TaskPayload: Validated payload model

    Raises:
        ValueError: Unknown task type
        pydantic.ValidationError: Payload does not match the model
    """
    model = PAYLOAD_MODELS.get(TaskType(task_type))
    if model is None:
        raise ValueError(f"No payload model registered for task type {task_type}")
    return model.model_validate(data)


class BatchReport(BaseModel):
    """Outcome counters for one process_batch call."""

    selected: int = 0
    completed: int = 0
    requeued: int = 0
    failed: int = 0
    skipped: int = 0
    released: int = 0
    embedded_chunks: int = 0
    cancelled: bool = False
