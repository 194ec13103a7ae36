"""
Chunking pipeline orchestrator.

Coordinates structure detection, segmentation, entity extraction and
attachment, relationship building and metadata aggregation for one
document. Performs no I/O.

Dependencies: All core stages, configs
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time
import uuid

from meeting_indexer.configs import ChunkingSettings
from meeting_indexer.core.extraction import EntityExtractor, EntityPatternConfig
from meeting_indexer.core.metadata import MetadataAggregator
from meeting_indexer.core.relationships import RelationshipBuilder
from meeting_indexer.core.segmentation import SegmentationEngine, StructureDetector
from meeting_indexer.models import ChunkingResult, ChunkingStrategy, DocumentKind

logger = logging.getLogger(__name__)


class ChunkingPipeline:
    """Orchestrate text -> chunks -> entities -> relationships -> metadata."""

    def __init__(
        self,
        settings: ChunkingSettings | None = None,
        patterns: EntityPatternConfig | None = None,
    ) -> None:
        """
        Initialize pipeline stages from configuration.

        Args:
            settings: Chunking settings (environment defaults if None)
            patterns: Entity rule table (production defaults if None)

        Raises:
            ConfigurationError: Token budgets are inconsistent
        """
        self._settings = settings or ChunkingSettings()

        self._detector = StructureDetector()
        self._engine = SegmentationEngine(
            max_tokens=self._settings.max_tokens,
            min_tokens=self._settings.min_tokens,
            overlap_tokens=self._settings.overlap_tokens,
            target_tokens=self._settings.target_tokens,
            detector=self._detector,
        )
        self._extractor = EntityExtractor(patterns)
        self._relationship_builder = RelationshipBuilder(
            topic_threshold=self._settings.topic_similarity_threshold,
            max_chunks=self._settings.max_relationship_chunks,
        )
        self._aggregator = MetadataAggregator()

    def process(
        self,
        text: str,
        kind: DocumentKind = DocumentKind.DOCUMENT,
        document_id: str | None = None,
    ) -> ChunkingResult:
        """
        Process one document through every stage.

        Blank input produces an empty result rather than an error.

        Args:
            text: Raw document text
            kind: Document kind tag (meeting, document, email, chat)
            document_id: Optional document ID (generated if None)

        Returns:
            ChunkingResult: Chunks, relationships and metadata
        """
        start_time = time.perf_counter()
        doc_id = document_id or str(uuid.uuid4())
        text = text or ""

        if not text.strip():
            logger.info(
                f"{__name__}:process - Empty input, nothing to chunk",
                extra={"document_id": doc_id},
            )
            return ChunkingResult(
                document_id=doc_id,
                kind=kind,
                strategy=ChunkingStrategy.NONE,
                processing_time_ms=(time.perf_counter() - start_time) * 1000,
            )

        entities = self._extractor.extract(text)
        structure = self._detector.detect(text)
        strategy = self._engine.select_strategy(structure, kind)

        chunks = self._engine.segment(text, kind, doc_id, structure=structure)
        chunks = self._extractor.attach(chunks, entities)
        relationships = self._relationship_builder.build(chunks)
        metadata = self._aggregator.aggregate(chunks, entities)

        elapsed_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            f"{__name__}:process - Document chunked",
            extra={
                "document_id": doc_id,
                "strategy": strategy.value,
                "chunk_count": len(chunks),
                "relationship_count": len(relationships),
                "elapsed_ms": round(elapsed_ms, 2),
            },
        )

        return ChunkingResult(
            document_id=doc_id,
            kind=kind,
            strategy=strategy,
            chunks=chunks,
            relationships=relationships,
            metadata=metadata,
            processing_time_ms=elapsed_ms,
        )
