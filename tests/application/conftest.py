"""
Fixtures for service-level tests.

Provides: scripted embedding providers and a recording sleep
Dependencies: pytest, meeting_indexer.boundary.embeddings
System role: Test doubles for the vectorization worker and search service
"""

import asyncio
from collections.abc import Callable

import pytest

from meeting_indexer.boundary.embeddings import DeterministicEmbeddingProvider
from meeting_indexer.configs import EmbeddingSettings, QueueSettings
from meeting_indexer.core.exceptions import EmbeddingError


class ScriptedProvider(DeterministicEmbeddingProvider):
    """
    Deterministic provider that fails on chosen calls.

    ``calls`` only records successful calls; ``attempts`` counts every call.
    """

    def __init__(
        self,
        fail_on: set[int] | None = None,
        always_fail: bool = False,
        after_call: Callable[[int], None] | None = None,
        dimension: int = 64,
    ) -> None:
        super().__init__(dimension=dimension)
        self.fail_on = fail_on or set()
        self.always_fail = always_fail
        self.after_call = after_call
        self.attempts = 0

    async def embed(self, texts: list[str]) -> list[list[float]]:
        self.attempts += 1
        if self.always_fail or self.attempts in self.fail_on:
            raise EmbeddingError("Provider unavailable", details={"call": self.attempts})
        vectors = await super().embed(texts)
        if self.after_call is not None:
            self.after_call(self.attempts)
        return vectors


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def fake_sleep(sleeps):
    async def _sleep(seconds: float) -> None:
        sleeps.append(seconds)
        await asyncio.sleep(0)

    return _sleep


@pytest.fixture
def embedding_settings() -> EmbeddingSettings:
    return EmbeddingSettings(_env_file=None, batch_size=20, batch_pause_seconds=0.5, query_retry_attempts=3)


@pytest.fixture
def queue_settings() -> QueueSettings:
    return QueueSettings(_env_file=None, max_attempts=3, batch_limit=10)


@pytest.fixture
def make_provider() -> Callable[..., ScriptedProvider]:
    """Factory for ScriptedProvider instances."""
    return ScriptedProvider
