"""
Test suite for SearchService.

System role: Verification of query embedding retries and similarity ranking
"""

import pytest
from tenacity import wait_none

from meeting_indexer.application import SearchService, VectorizationWorker
from meeting_indexer.boundary.db.models import VectorIndexModel
from meeting_indexer.core.exceptions import EmbeddingError, ValidationError, VectorStoreError


class FlakyQueryProvider:
    """Wraps a provider so the first ``failures`` query embeddings raise."""

    def __init__(self, provider, failures: int) -> None:
        self._provider = provider
        self.failures = failures
        self.query_attempts = 0
        self.model_name = provider.model_name
        self.dimension = provider.dimension

    async def embed(self, texts):
        return await self._provider.embed(texts)

    async def embed_query(self, text):
        self.query_attempts += 1
        if self.query_attempts <= self.failures:
            raise EmbeddingError("Provider timeout")
        return await self._provider.embed_query(text)


@pytest.fixture
async def indexed(seed_document, session_factory, make_provider, embedding_settings, queue_settings, fake_sleep):
    """Seed two documents and embed all of their chunks."""
    budget_id, _, _ = await seed_document(chunk_count=5, title="Budget sync")
    hiring_id, _, _ = await seed_document(chunk_count=3, title="Hiring sync")
    provider = make_provider()
    await VectorizationWorker(
        session_factory,
        provider,
        embedding_settings=embedding_settings,
        queue_settings=queue_settings,
        sleep=fake_sleep,
    ).process_batch()
    return provider, budget_id, hiring_id


def _search_service(session_factory, provider, embedding_settings) -> SearchService:
    return SearchService(session_factory, provider, embedding_settings, retry_wait=wait_none())


@pytest.mark.asyncio
async def test_exact_content_ranks_first(indexed, session_factory, embedding_settings):
    # Arrange
    provider, budget_id, _ = indexed
    service = _search_service(session_factory, provider, embedding_settings)
    query = "Budget sync item 2: budget review for workstream 2."

    # Act
    hits = await service.search(query, top_k=3)

    # Assert
    assert hits
    assert hits[0].preview == query
    assert hits[0].similarity == pytest.approx(1.0, abs=1e-5)
    assert hits[0].document_id == str(budget_id)
    assert hits[0].title == "Budget sync"
    assert all(hit.similarity >= 0.7 for hit in hits)
    assert [hit.similarity for hit in hits] == sorted((hit.similarity for hit in hits), reverse=True)


@pytest.mark.asyncio
async def test_min_score_and_document_filter(indexed, session_factory, embedding_settings):
    provider, _, hiring_id = indexed
    service = _search_service(session_factory, provider, embedding_settings)

    everything = await service.search("unrelated words", top_k=100, min_score=-1.0)
    hiring_only = await service.search("unrelated words", top_k=100, document_id=hiring_id, min_score=-1.0)

    assert len(everything) == 8
    assert len(hiring_only) == 3
    assert {hit.document_id for hit in hiring_only} == {str(hiring_id)}


@pytest.mark.asyncio
async def test_query_embedding_retried(indexed, session_factory, embedding_settings):
    provider, _, _ = indexed
    flaky = FlakyQueryProvider(provider, failures=2)
    service = _search_service(session_factory, flaky, embedding_settings)

    hits = await service.search("Hiring sync item 0: budget review for workstream 0.", top_k=1)

    assert flaky.query_attempts == 3
    assert hits[0].title == "Hiring sync"


@pytest.mark.asyncio
async def test_query_embedding_gives_up(indexed, session_factory, embedding_settings):
    provider, _, _ = indexed
    flaky = FlakyQueryProvider(provider, failures=10)
    service = _search_service(session_factory, flaky, embedding_settings)

    with pytest.raises(EmbeddingError):
        await service.search("budget")

    assert flaky.query_attempts == 3


@pytest.mark.asyncio
async def test_blank_query_skips_provider(indexed, session_factory, embedding_settings):
    provider, _, _ = indexed
    calls_before = len(provider.calls)
    service = _search_service(session_factory, provider, embedding_settings)

    assert await service.search("   ") == []
    assert len(provider.calls) == calls_before


@pytest.mark.asyncio
async def test_dimension_mismatch_skipped(indexed, session_factory, embedding_settings, make_provider):
    service = _search_service(session_factory, make_provider(dimension=32), embedding_settings)

    assert await service.search("budget", min_score=-1.0) == []


@pytest.mark.asyncio
async def test_non_positive_top_k_rejected(session_factory, embedding_settings, make_provider):
    service = _search_service(session_factory, make_provider(), embedding_settings)

    with pytest.raises(ValidationError) as exc_info:
        await service.search("budget", top_k=0)

    assert exc_info.value.details["field"] == "top_k"


@pytest.mark.asyncio
async def test_storage_failure_raises_vector_store_error(
    indexed, async_engine, session_factory, embedding_settings
):
    provider, _, _ = indexed
    async with async_engine.begin() as conn:
        await conn.run_sync(VectorIndexModel.__table__.drop)
    service = _search_service(session_factory, provider, embedding_settings)

    with pytest.raises(VectorStoreError) as exc_info:
        await service.search("budget")

    assert exc_info.value.details["operation"] == "search"
