"""
Google Generative AI Embeddings wrapper with fixed output dimensionality.

Wraps GoogleGenerativeAIEmbeddings so every async embedding call requests
the configured dimension. Stored vectors and query vectors must agree in
length for cosine similarity to be defined.

Dependencies: langchain_google_genai
System role: Embedding dimension consistency for stored chunk vectors
"""

import logging

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """
    GoogleGenerativeAIEmbeddings wrapper with fixed output dimensionality.

    The base class does not apply ``output_dimensionality`` from its
    constructor; this wrapper injects it into each call.
    """

    _output_dimensionality: int = 1024

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1024,
        **kwargs,
    ) -> None:
        """
        Initialize embeddings with fixed output dimensionality.

        Args:
            model: Google embedding model ID
            output_dimensionality: Fixed dimension for all embeddings
            **kwargs: Additional arguments for GoogleGenerativeAIEmbeddings

        Note:
            gemini-embedding-001 supports up to 3072 dimensions, reducible to 1024.
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, "
            f"output_dimensionality={output_dimensionality}"
        )

    async def aembed_documents(self, texts: list[str], **kwargs) -> list[list[float]]:
        """
        Embed documents with fixed output dimensionality.

        Args:
            texts: List of texts to embed
            **kwargs: Passed through (batch_size, task_type, titles, output_dimensionality)

        Returns:
            List of embedding vectors
        """
        kwargs["output_dimensionality"] = kwargs.get("output_dimensionality") or self._output_dimensionality
        return await super().aembed_documents(texts, **kwargs)

    async def aembed_query(self, text: str, **kwargs) -> list[float]:
        """
        Embed query with fixed output dimensionality.

        Args:
            text: Query text to embed
            **kwargs: Passed through (task_type, title, output_dimensionality)

        Returns:
            Embedding vector
        """
        kwargs["output_dimensionality"] = kwargs.get("output_dimensionality") or self._output_dimensionality
        return await super().aembed_query(text, **kwargs)
