"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from meeting_indexer.configs.chunking import ChunkingSettings
from meeting_indexer.configs.database import DatabaseSettings
from meeting_indexer.configs.embedding import EmbeddingSettings
from meeting_indexer.configs.queue import QueueSettings
from meeting_indexer.configs.s3_archive import S3ArchiveSettings
from meeting_indexer.configs.settings import Settings, get_settings

__all__ = [
    "ChunkingSettings",
    "DatabaseSettings",
    "EmbeddingSettings",
    "QueueSettings",
    "S3ArchiveSettings",
    "Settings",
    "get_settings",
]
