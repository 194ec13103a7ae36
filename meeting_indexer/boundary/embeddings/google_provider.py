"""
Google Gemini embedding provider.

Dependencies: langchain_google_genai, python-dotenv
System role: Production EmbeddingProvider for the vectorization worker and search
"""

import logging

from dotenv import load_dotenv

from meeting_indexer.boundary.embeddings.embeddings_wrapper import FixedDimensionEmbeddings
from meeting_indexer.boundary.embeddings.provider import EmbeddingProvider
from meeting_indexer.configs import EmbeddingSettings
from meeting_indexer.core.exceptions import ConfigurationError, EmbeddingError

load_dotenv()
logger = logging.getLogger(__name__)


class GoogleEmbeddingProvider(EmbeddingProvider):
    """EmbeddingProvider backed by Gemini embeddings through LangChain."""

    def __init__(self, settings: EmbeddingSettings | None = None) -> None:
        """
        Initialize provider from embedding settings.

        Args:
            settings: Embedding settings (environment defaults if None)

        Raises:
            ConfigurationError: No Google API key configured
        """
        settings = settings or EmbeddingSettings()
        if not settings.google_api_key:
            raise ConfigurationError(
                "Google API key is required for the embedding provider",
                setting="EMBEDDING_GOOGLE_API_KEY",
            )

        self.model_name = settings.model
        self.dimension = settings.dimension
        self._batch_size = settings.batch_size
        self._embeddings = FixedDimensionEmbeddings(
            model=settings.model,
            output_dimensionality=settings.dimension,
            google_api_key=settings.google_api_key,
        )

    async def embed(self, texts: list[str]) -> list[list[float]]:
        """
        Embed up to ``batch_size`` texts in one provider call.

        Raises:
            EmbeddingError: Provider failure or response length mismatch
        """
        if not texts:
            return []

        try:
            vectors = await self._embeddings.aembed_documents(
                texts,
                batch_size=self._batch_size,
                task_type="RETRIEVAL_DOCUMENT",
            )
        except Exception as e:
            raise EmbeddingError(
                f"Embedding request failed: {type(e).__name__}: {e}",
                details={"model": self.model_name, "batch": len(texts)},
            ) from e

        if len(vectors) != len(texts):
            raise EmbeddingError(
                "Embedding response length does not match request",
                details={"requested": len(texts), "received": len(vectors)},
            )

        logger.debug(
            f"{__name__}:embed - Embedded batch",
            extra={"model": self.model_name, "batch": len(texts)},
        )
        return [list(vector) for vector in vectors]

    async def embed_query(self, text: str) -> list[float]:
        """
        Embed a search query.

        Raises:
            EmbeddingError: Provider failure
        """
        try:
            vector = await self._embeddings.aembed_query(text, task_type="RETRIEVAL_QUERY")
        except Exception as e:
            raise EmbeddingError(
                f"Query embedding failed: {type(e).__name__}: {e}",
                details={"model": self.model_name},
            ) from e
        return list(vector)
