"""
Test suite for ChunkingPipeline orchestration.

System role: Verification of the end-to-end pure pipeline
"""

import pytest

from meeting_indexer.configs import ChunkingSettings
from meeting_indexer.core.entrypoint import ChunkingPipeline
from meeting_indexer.models import ChunkingStrategy, DocumentKind, EntityType, RelationshipType

ALICE_BOB = "Alice: We decided to use Option B.\nBob: Sounds good, due by 2025-01-15."


@pytest.fixture
def pipeline() -> ChunkingPipeline:
    return ChunkingPipeline(ChunkingSettings())


class TestChunkingPipeline:
    """Test suite for ChunkingPipeline.process()."""

    def test_meeting_transcript_end_to_end(self, pipeline: ChunkingPipeline) -> None:
        # Act
        result = pipeline.process(ALICE_BOB, DocumentKind.MEETING, "doc-1")

        # Assert
        assert result.document_id == "doc-1"
        assert result.strategy is ChunkingStrategy.SPEAKER_AWARE
        assert [chunk.speaker for chunk in result.chunks] == ["Alice", "Bob"]
        assert [edge.type for edge in result.relationships] == [RelationshipType.SEQUENTIAL]
        assert result.metadata.speakers == ["Alice", "Bob"]
        assert [event.type for event in result.metadata.timeline] == [EntityType.DECISION]
        assert result.processing_time_ms >= 0

    def test_chunks_carry_attached_entities(self, pipeline: ChunkingPipeline) -> None:
        result = pipeline.process(ALICE_BOB, DocumentKind.MEETING, "doc-1")

        assert [entity.type for entity in result.chunks[1].entities] == [EntityType.DATE]

    @pytest.mark.parametrize("text", ["", "   \n  "])
    def test_blank_input_returns_empty_result(self, pipeline: ChunkingPipeline, text: str) -> None:
        result = pipeline.process(text, DocumentKind.MEETING, "doc-1")

        assert result.strategy is ChunkingStrategy.NONE
        assert result.chunks == []
        assert result.relationships == []
        assert result.metadata.chunk_count == 0

    def test_document_id_generated_when_missing(self, pipeline: ChunkingPipeline) -> None:
        result = pipeline.process("Plain note.")

        assert result.document_id
        assert result.chunks[0].document_id == result.document_id
