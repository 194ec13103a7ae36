"""
Embedding provider configuration settings.

Model selection, output dimensionality, credentials and the batching
limits the provider imposes.

Dependencies: pydantic, pydantic_settings
System role: Embedding provider configuration for the vectorization worker
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from meeting_indexer.configs.base import BaseSettings


class EmbeddingSettings(BaseSettings):
    """Embedding provider configuration (Google Gemini embeddings)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EMBEDDING_",
        case_sensitive=False,
        extra="ignore",
    )

    model: str = Field(
        default="models/gemini-embedding-001",
        description="Google embedding model ID",
    )
    dimension: int = Field(
        default=1024,
        description="Fixed output dimensionality for every embedding",
    )
    google_api_key: str = Field(
        default="",
        description="Google Generative AI API key",
    )

    batch_size: int = Field(
        default=20,
        description="Maximum texts per provider call",
    )
    batch_pause_seconds: float = Field(
        default=0.5,
        description="Pause between provider calls to respect rate limits",
    )
    query_retry_attempts: int = Field(
        default=3,
        description="Retries for query embedding during search",
    )
