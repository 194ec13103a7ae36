"""
Test suite for MetadataAggregator.

System role: Verification of document-level rollups
"""

import pytest

from meeting_indexer.core.metadata import MetadataAggregator, action_item_details
from meeting_indexer.models import Chunk, ChunkType, EntityType, ExtractedEntity


def entity(entity_type: EntityType, value: str, context: str = "") -> ExtractedEntity:
    return ExtractedEntity(
        type=entity_type,
        value=value,
        confidence=0.9,
        source_position=0,
        context_window=context,
    )


@pytest.fixture
def chunks() -> list[Chunk]:
    return [
        Chunk(
            id="c0",
            document_id="doc-1",
            content="Alice: We decided to ship.",
            position=0.0,
            sort_key="000000",
            type=ChunkType.SPEAKER_TURN,
            token_count=7,
            topics=["ship", "decided"],
            speaker="Alice",
            start_time=30.0,
            entities=[entity(EntityType.DECISION, "ship")],
        ),
        Chunk(
            id="c1",
            document_id="doc-1",
            content="Bob: TODO: send report, owner: Dana, due: Friday",
            position=1.0,
            sort_key="000001",
            type=ChunkType.SPEAKER_TURN,
            token_count=12,
            topics=["report", "ship"],
            speaker="Bob",
            start_time=10.0,
            entities=[
                entity(
                    EntityType.ACTION_ITEM,
                    "send report",
                    context="TODO: send report, owner: Dana, due: Friday",
                ),
                entity(EntityType.PERSON, "Dana"),
            ],
        ),
    ]


class TestAggregate:
    """Test suite for MetadataAggregator.aggregate()."""

    def test_totals_topics_and_speakers(self, chunks: list[Chunk]) -> None:
        # Act
        metadata = MetadataAggregator().aggregate(chunks, {})

        # Assert
        assert metadata.total_tokens == 19
        assert metadata.chunk_count == 2
        assert metadata.topics == ["ship", "decided", "report"]
        assert metadata.speakers == ["Alice", "Bob"]

    def test_timeline_sorted_by_start_time(self, chunks: list[Chunk]) -> None:
        """Test only timeline entity types are included, in time order."""
        metadata = MetadataAggregator().aggregate(chunks, {})

        assert [(event.type, event.timestamp) for event in metadata.timeline] == [
            (EntityType.ACTION_ITEM, 10.0),
            (EntityType.DECISION, 30.0),
        ]
        action = metadata.timeline[0]
        assert action.source_chunk_id == "c1"
        assert action.assignee == "Dana"
        assert action.due_date == "Friday"

    def test_timeline_falls_back_to_position(self, chunks: list[Chunk]) -> None:
        for chunk in chunks:
            chunk.start_time = None

        metadata = MetadataAggregator().aggregate(chunks, {})

        assert [event.timestamp for event in metadata.timeline] == [0.0, 1.0]

    def test_summary_counts_entity_types(self, chunks: list[Chunk]) -> None:
        entities = {
            EntityType.DECISION: [entity(EntityType.DECISION, "ship")],
            EntityType.ACTION_ITEM: [entity(EntityType.ACTION_ITEM, "send report")],
        }

        metadata = MetadataAggregator().aggregate(chunks, entities)

        assert metadata.summary == "2 chunks, 2 speakers, 1 decision, 1 action item"
        assert metadata.entities == entities

    def test_empty_input_has_no_optional_fields(self) -> None:
        metadata = MetadataAggregator().aggregate([], {})

        assert metadata.chunk_count == 0
        assert metadata.speakers is None
        assert metadata.timeline is None
        assert metadata.summary is None


class TestActionItemDetails:
    """Test suite for action_item_details()."""

    def test_missing_fields_are_none(self) -> None:
        assert action_item_details("just do it") == (None, None)

    def test_assigned_to_and_deadline(self) -> None:
        assert action_item_details("assigned to Priya, deadline 2025-02-01") == ("Priya", "2025-02-01")
