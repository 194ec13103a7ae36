"""
S3 archive bucket configuration.

Settings for the write-only backup of formatted chunking output.

Dependencies: pydantic, pydantic_settings
System role: S3 archive bucket configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from meeting_indexer.configs.base import BaseSettings


class S3ArchiveSettings(BaseSettings):
    """Settings for S3 archive uploads."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="S3_ARCHIVE_",
        case_sensitive=False,
        extra="ignore",
    )

    enabled: bool = Field(
        default=False,
        description="Upload chunking results to S3 after ingestion",
    )
    bucket: str = Field(
        default="meeting-indexer-dev-archive",
        description="S3 bucket for archived chunking results",
    )
    region: str = Field(
        default="us-east-1",
        description="AWS region for S3 bucket",
    )
    prefix: str = Field(
        default="chunking-results",
        description="Key prefix for archived objects",
    )
