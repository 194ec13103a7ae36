"""
Embedding provider interface.

The vectorization worker and search service depend on this interface
only. Providers accept at most ``batch_size`` texts per call and return a
same-length, order-preserving list of fixed-dimension vectors.

Dependencies: numpy
System role: Embedding abstraction plus a deterministic provider for tests and local runs
"""

import hashlib
from abc import ABC, abstractmethod

import numpy as np


class EmbeddingProvider(ABC):
    """Turn texts into fixed-dimension vectors."""

    model_name: str = "unknown"
    dimension: int = 0

    @abstractmethod
    async def embed(self, texts: list[str]) -> list[list[float]]:
        """
        Embed a batch of texts.

        Args:
            texts: Texts to embed, in order

        Returns:
            list[list[float]]: One vector per input text, same order

        Raises:
            EmbeddingError: Provider call failed or returned a mismatched batch
        """

    async def embed_query(self, text: str) -> list[float]:
        """Embed a single search query."""
        vectors = await self.embed([text])
        return vectors[0]


class DeterministicEmbeddingProvider(EmbeddingProvider):
    """
    Hash-seeded unit vectors; identical texts always map to identical vectors.

    No network access, so it backs the test suite and local development.
    """

    def __init__(self, dimension: int = 64, model_name: str = "deterministic-hash") -> None:
        self.dimension = dimension
        self.model_name = model_name
        self.calls: list[list[str]] = []

    def _vector(self, text: str) -> list[float]:
        seed = int.from_bytes(hashlib.sha256(text.encode("utf-8")).digest()[:8], "little")
        values = np.random.default_rng(seed).standard_normal(self.dimension)
        norm = np.linalg.norm(values)
        return (values / norm).astype(np.float32).tolist()

    async def embed(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self._vector(text) for text in texts]
