"""
Chunking configuration settings.

Token budgets for the segmentation engine and thresholds for the
relationship builder.

Dependencies: pydantic, pydantic_settings
System role: Segmentation and graph-building configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from meeting_indexer.configs.base import BaseSettings


class ChunkingSettings(BaseSettings):
    """Token budgets and graph thresholds for the chunking pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHUNKING_",
        case_sensitive=False,
        extra="ignore",
    )

    max_tokens: int = Field(default=1500, description="Hard ceiling per chunk")
    min_tokens: int = Field(default=100, description="Floor for trailing chunks")
    overlap_tokens: int = Field(default=200, description="Maximum overlap carried between chunks")
    target_tokens: int = Field(default=1000, description="Flush threshold per chunk")

    topic_similarity_threshold: float = Field(
        default=0.7,
        description="Minimum Jaccard similarity for topic_continuation edges",
    )
    max_relationship_chunks: int = Field(
        default=5000,
        description="Above this chunk count only sequential edges are built",
    )
