"""
Vectorization queue configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Retry bounds and polling cadence for processing tasks
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from meeting_indexer.configs.base import BaseSettings


class QueueSettings(BaseSettings):
    """Processing task queue configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_QUEUE_",
        case_sensitive=False,
        extra="ignore",
    )

    max_attempts: int = Field(default=3, description="Attempts before a task is permanently failed")
    default_priority: int = Field(default=5, description="Priority for newly enqueued tasks")
    batch_limit: int = Field(default=10, description="Tasks claimed per process_batch call")
    poll_interval_seconds: float = Field(default=5.0, description="Idle wait between polls")
