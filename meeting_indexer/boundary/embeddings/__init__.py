"""
Embedding providers.

GoogleEmbeddingProvider is imported from its module directly so that the
LangChain dependency is only loaded where it is used.
"""

from meeting_indexer.boundary.embeddings.provider import (
    DeterministicEmbeddingProvider,
    EmbeddingProvider,
)

__all__ = ["DeterministicEmbeddingProvider", "EmbeddingProvider"]
