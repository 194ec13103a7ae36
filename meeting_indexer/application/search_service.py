"""
Similarity search service.

Embeds a query through the provider and ranks stored chunk vectors by
cosine similarity, reusing the magnitudes stored next to each vector.

Dependencies: tenacity, numpy (via vector_codec), meeting_indexer.boundary
System role: Read path over the vector index
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)
from tenacity.wait import wait_base

from meeting_indexer.application.vector_codec import cosine_similarity, vector_magnitude
from meeting_indexer.boundary.db.CRUD import embedding_crud
from meeting_indexer.boundary.embeddings import EmbeddingProvider
from meeting_indexer.configs import EmbeddingSettings
from meeting_indexer.core.exceptions import EmbeddingError, ValidationError, VectorStoreError
from meeting_indexer.models import SearchHit

logger = logging.getLogger(__name__)


class SearchService:
    """Rank stored chunks against a free-text query."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        provider: EmbeddingProvider,
        embedding_settings: EmbeddingSettings | None = None,
        retry_wait: wait_base | None = None,
    ) -> None:
        """
        Initialize search service.

        Args:
            session_factory: Async session factory for the relational store
            provider: Embedding provider (must match the one used by the worker)
            embedding_settings: Query retry attempts (defaults if None)
            retry_wait: Wait strategy between query retries (exponential jitter if None)
        """
        self._session_factory = session_factory
        self._provider = provider
        self._settings = embedding_settings or EmbeddingSettings()
        self._retry_wait = retry_wait or wait_exponential_jitter(initial=0.5, max=5, jitter=0.5)

    async def _embed_query(self, query: str) -> list[float]:
        attempts = self._settings.query_retry_attempts
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(EmbeddingError),
            stop=stop_after_attempt(attempts),
            wait=self._retry_wait,
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:_embed_query - Retry {retry_state.attempt_number}/{attempts} after provider error"
            ),
            reraise=True,
        ):
            with attempt:
                return await self._provider.embed_query(query)

    async def search(
        self,
        query: str,
        top_k: int = 5,
        document_id: UUID | None = None,
        min_score: float = 0.7,
    ) -> list[SearchHit]:
        """
        Find the chunks most similar to ``query``.

        Args:
            query: Free-text query
            top_k: Maximum number of hits
            document_id: Restrict to one document (None for all)
            min_score: Minimum cosine similarity for a hit

        Returns:
            list[SearchHit]: Hits sorted by similarity (desc); empty for blank queries

        Raises:
            ValidationError: top_k is not positive
            EmbeddingError: Query embedding failed after retries
            VectorStoreError: Stored vectors could not be read
        """
        if top_k < 1:
            raise ValidationError("top_k must be at least 1", field="top_k", details={"top_k": top_k})
        if not query or not query.strip():
            return []

        query_vector = await self._embed_query(query)
        query_magnitude = vector_magnitude(query_vector)

        try:
            async with self._session_factory() as session:
                candidates = await embedding_crud.get_search_candidates(session, document_id)
        except SQLAlchemyError as e:
            raise VectorStoreError(
                f"Failed to load search candidates: {type(e).__name__}: {e}",
                operation="search",
                details={"document_id": str(document_id) if document_id else None},
            ) from e

        hits: list[SearchHit] = []
        for candidate in candidates:
            try:
                similarity = cosine_similarity(
                    query_vector,
                    candidate.vector,
                    candidate.magnitude,
                    query_magnitude,
                )
            except ValueError as e:
                logger.warning(
                    f"{__name__}:search - Skipping vector: {e}",
                    extra={"chunk_id": candidate.chunk_id},
                )
                continue

            if similarity < min_score:
                continue
            hits.append(
                SearchHit(
                    chunk_id=candidate.chunk_id,
                    document_id=str(candidate.document_id),
                    title=candidate.title,
                    occurred_at=candidate.occurred_at,
                    preview=candidate.preview,
                    similarity=similarity,
                    relevance_score=candidate.relevance_score,
                )
            )

        hits.sort(key=lambda hit: hit.similarity, reverse=True)

        logger.info(
            f"{__name__}:search - Search complete",
            extra={
                "candidates": len(candidates),
                "hits": len(hits[:top_k]),
                "document_id": str(document_id) if document_id else None,
            },
        )
        return hits[:top_k]
