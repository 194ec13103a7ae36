"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from meeting_indexer.configs.base import BaseSettings
from meeting_indexer.configs.chunking import ChunkingSettings
from meeting_indexer.configs.database import DatabaseSettings
from meeting_indexer.configs.embedding import EmbeddingSettings
from meeting_indexer.configs.queue import QueueSettings
from meeting_indexer.configs.s3_archive import S3ArchiveSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    chunking: ChunkingSettings = Field(default_factory=ChunkingSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    queue: QueueSettings = Field(default_factory=QueueSettings)
    s3_archive: S3ArchiveSettings = Field(default_factory=S3ArchiveSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are loaded once and cached for the process.

    Returns:
        Settings: Application settings instance

    Usage:
        from meeting_indexer.configs import get_settings
        settings = get_settings()
    """
    return Settings()
