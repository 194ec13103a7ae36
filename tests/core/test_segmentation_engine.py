"""
Test suite for SegmentationEngine.

Covers strategy selection, the three chunking strategies, chunk linking
and budget validation.

System role: Verification of the second pipeline stage
"""

import pytest

from meeting_indexer.core.exceptions import ConfigurationError
from meeting_indexer.core.segmentation import SegmentationEngine, StructureDetector
from meeting_indexer.core.segmentation.text_stats import split_sentences
from meeting_indexer.models import ChunkingStrategy, ChunkType, DocumentKind

ALICE_BOB = "Alice: We decided to use Option B.\nBob: Sounds good, due by 2025-01-15."

PROSE_SENTENCE = "The quarterly review covered budget allocation and hiring plans for the team."


def prose(token_target: int) -> str:
    """Plain prose of roughly ``token_target`` estimated tokens, no headers or speakers."""
    sentences = []
    index = 0
    while len(" ".join(sentences)) < token_target * 4:
        sentences.append(f"{PROSE_SENTENCE[:-1]} number {index}.")
        index += 1
    return " ".join(sentences)


@pytest.fixture
def engine() -> SegmentationEngine:
    return SegmentationEngine()


@pytest.fixture
def small_engine() -> SegmentationEngine:
    return SegmentationEngine(max_tokens=150, min_tokens=10, overlap_tokens=40, target_tokens=100)


class TestStrategySelection:
    """Test suite for select_strategy()."""

    def test_meeting_with_speakers_is_speaker_aware(self, engine: SegmentationEngine) -> None:
        structure = StructureDetector().detect(ALICE_BOB)
        assert engine.select_strategy(structure, DocumentKind.MEETING) is ChunkingStrategy.SPEAKER_AWARE

    def test_document_with_speakers_is_not_speaker_aware(self, engine: SegmentationEngine) -> None:
        """Test speaker lines only matter for meeting and chat kinds."""
        structure = StructureDetector().detect(ALICE_BOB)
        assert engine.select_strategy(structure, DocumentKind.DOCUMENT) is ChunkingStrategy.SLIDING_WINDOW

    def test_headers_select_topic_aware(self, engine: SegmentationEngine) -> None:
        structure = StructureDetector().detect("# Scope\nText here.")
        assert engine.select_strategy(structure, DocumentKind.DOCUMENT) is ChunkingStrategy.TOPIC_AWARE


class TestSpeakerAwareSegmentation:
    """Test suite for speaker-aware chunking."""

    def test_alice_bob_scenario_yields_two_linked_chunks(self, engine: SegmentationEngine) -> None:
        """Test one chunk per speaker turn, linked in order."""
        # Act
        chunks = engine.segment(ALICE_BOB, DocumentKind.MEETING, "doc-1")

        # Assert
        assert len(chunks) == 2
        assert [chunk.speaker for chunk in chunks] == ["Alice", "Bob"]
        assert all(chunk.type is ChunkType.SPEAKER_TURN for chunk in chunks)
        assert chunks[0].previous_chunk_id is None
        assert chunks[0].next_chunk_id == chunks[1].id
        assert chunks[1].previous_chunk_id == chunks[0].id
        assert chunks[1].next_chunk_id is None

    def test_context_snippets_come_from_neighbours(self, engine: SegmentationEngine) -> None:
        chunks = engine.segment(ALICE_BOB, DocumentKind.MEETING, "doc-1")

        assert chunks[0].context_after == "Bob: Sounds good, due by 2025-01-15."
        assert chunks[1].context_before == "Alice: We decided to use Option B."

    def test_timestamps_set_start_and_end_times(self, engine: SegmentationEngine) -> None:
        """Test a turn ends where the next timestamped turn starts."""
        text = "[00:10] Alice: Kickoff.\n[00:45] Bob: Status update.\n[01:20] Alice: Wrap up."

        chunks = engine.segment(text, DocumentKind.MEETING, "doc-1")

        assert [chunk.start_time for chunk in chunks] == [10.0, 45.0, 80.0]
        assert [chunk.end_time for chunk in chunks] == [45.0, 80.0, None]

    def test_continuation_lines_stay_with_speaker(self, engine: SegmentationEngine) -> None:
        text = "Alice: First point.\nand a continuation line\nBob: Reply."

        chunks = engine.segment(text, DocumentKind.MEETING, "doc-1")

        assert len(chunks) == 2
        assert "continuation line" in chunks[0].content

    def test_long_monologue_is_force_flushed_within_budget(self, small_engine: SegmentationEngine) -> None:
        """Test target-based flush splits a single long turn without losing lines."""
        # Arrange
        lines = ["Alice: Opening remarks."] + [f"point {index} is noted" for index in range(60)]
        text = "\n".join(lines)

        # Act
        chunks = small_engine.segment(text, DocumentKind.MEETING, "doc-1")

        # Assert
        assert len(chunks) > 1
        assert all(chunk.speaker == "Alice" for chunk in chunks)
        assert all(chunk.token_count <= small_engine.max_tokens for chunk in chunks)
        covered = {line for chunk in chunks for line in chunk.content.split("\n")}
        assert set(lines) <= covered

    def test_no_words_lost_across_turns_and_oversized_lines(self, small_engine: SegmentationEngine) -> None:
        """Test every word of a multi-speaker transcript lands in some chunk."""
        # Arrange
        long_line = "Bob: " + " ".join(f"detail{index}" for index in range(150)) + "."
        lines = (
            ["Alice: Opening remarks."]
            + [f"point {index} is noted" for index in range(60)]
            + [long_line, "Carol: Agreed, ship it.", "", "Alice: Closing thoughts."]
        )
        text = "\n".join(lines)

        # Act
        chunks = small_engine.segment(text, DocumentKind.MEETING, "doc-1")

        # Assert
        assert any(chunk.speaker == "Bob" for chunk in chunks)
        assert all(chunk.token_count <= small_engine.max_tokens for chunk in chunks)
        covered = {word for chunk in chunks for word in chunk.content.split()}
        assert set(text.split()) <= covered


class TestSlidingWindowSegmentation:
    """Test suite for sliding-window chunking."""

    def test_three_thousand_token_document_yields_three_to_four_chunks(
        self, engine: SegmentationEngine
    ) -> None:
        """Test fallback chunking with default budgets."""
        # Arrange
        text = prose(3000)

        # Act
        chunks = engine.segment(text, DocumentKind.DOCUMENT, "doc-1")

        # Assert
        assert 3 <= len(chunks) <= 4
        assert all(chunk.type is ChunkType.SLIDING_WINDOW for chunk in chunks)
        assert all(100 <= chunk.token_count <= 1500 for chunk in chunks)

    def test_every_sentence_appears_in_some_chunk(self, engine: SegmentationEngine) -> None:
        """Test no silent data loss across chunk boundaries."""
        text = prose(3000)

        chunks = engine.segment(text, DocumentKind.DOCUMENT, "doc-1")

        joined = "\n".join(chunk.content for chunk in chunks)
        assert all(sentence in joined for sentence in split_sentences(text))

    def test_consecutive_chunks_overlap(self, engine: SegmentationEngine) -> None:
        chunks = engine.segment(prose(3000), DocumentKind.DOCUMENT, "doc-1")

        last_sentence = split_sentences(chunks[0].content)[-1]
        assert last_sentence in chunks[1].content

    def test_positions_strictly_increase(self, engine: SegmentationEngine) -> None:
        chunks = engine.segment(prose(3000), DocumentKind.DOCUMENT, "doc-1")

        positions = [chunk.position for chunk in chunks]
        assert positions == sorted(set(positions))

    def test_short_text_is_a_single_chunk(self, engine: SegmentationEngine) -> None:
        chunks = engine.segment("Just one short note without structure", DocumentKind.EMAIL, "doc-1")

        assert len(chunks) == 1
        assert chunks[0].content == "Just one short note without structure"


class TestTopicAwareSegmentation:
    """Test suite for header-based chunking."""

    def test_sections_become_topic_segments(self, engine: SegmentationEngine) -> None:
        # Arrange
        text = "Preamble line.\n# Budget\nWe reviewed spend.\n# Hiring\nTwo roles are open."

        # Act
        chunks = engine.segment(text, DocumentKind.DOCUMENT, "doc-1")

        # Assert
        assert [chunk.topics for chunk in chunks] == [["Introduction"], ["Budget"], ["Hiring"]]
        assert all(chunk.type is ChunkType.TOPIC_SEGMENT for chunk in chunks)
        assert chunks[1].content.startswith("# Budget")

    def test_oversized_section_is_split_under_synthetic_parent(
        self, small_engine: SegmentationEngine
    ) -> None:
        """Test fractional positions keep sub-chunks between their neighbours."""
        # Arrange
        text = "# Short\nA brief section.\n# Long\n" + prose(600) + "\n# After\nClosing words."

        # Act
        chunks = small_engine.segment(text, DocumentKind.DOCUMENT, "doc-1")

        # Assert
        subs = [chunk for chunk in chunks if chunk.parent_chunk_id is not None]
        assert len(subs) > 1
        assert len({chunk.parent_chunk_id for chunk in subs}) == 1
        assert all(chunk.type is ChunkType.SLIDING_WINDOW for chunk in subs)
        assert all(1.0 < chunk.position < 2.0 for chunk in subs)
        positions = [chunk.position for chunk in chunks]
        assert positions == sorted(set(positions))
        assert chunks[-1].position == 2.0
        assert chunks[0].sort_key == "000000"
        assert subs[0].sort_key == "000001.0001"
        assert [chunk.sort_key for chunk in chunks] == sorted(chunk.sort_key for chunk in chunks)

    def test_no_words_lost_across_sections(self, small_engine: SegmentationEngine) -> None:
        """Test every word survives, including those of an oversized section."""
        # Arrange
        long_sentence = " ".join(f"clause{index}" for index in range(200)) + "."
        text = (
            "Preamble line.\n# Short\nA brief section.\n# Long\n"
            + prose(600)
            + " "
            + long_sentence
            + "\nBUDGET NOTES\nClosing words."
        )

        # Act
        chunks = small_engine.segment(text, DocumentKind.DOCUMENT, "doc-1")

        # Assert
        assert any(chunk.parent_chunk_id is not None for chunk in chunks)
        assert all(chunk.token_count <= small_engine.max_tokens for chunk in chunks)
        covered = {word for chunk in chunks for word in chunk.content.split()}
        assert set(text.split()) <= covered

    def test_short_caps_line_before_blank_line_falls_back_to_window(
        self, engine: SegmentationEngine
    ) -> None:
        """Test a two-letter line is not a header, so plain prose keeps integer positions."""
        # Act
        chunks = engine.segment("OK\n\n" + prose(3000), DocumentKind.DOCUMENT, "doc-1")

        # Assert
        assert len(chunks) > 1
        assert all(chunk.type is ChunkType.SLIDING_WINDOW for chunk in chunks)
        assert all(chunk.parent_chunk_id is None for chunk in chunks)
        assert [chunk.position for chunk in chunks] == [float(index) for index in range(len(chunks))]
        assert chunks[0].content.startswith("OK")


class TestSegmentationContract:
    """Test suite for general engine guarantees."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\n"])
    def test_blank_input_yields_no_chunks(self, engine: SegmentationEngine, text: str) -> None:
        assert engine.segment(text, DocumentKind.MEETING, "doc-1") == []

    def test_chunk_ids_are_deterministic(self, engine: SegmentationEngine) -> None:
        first = engine.segment(ALICE_BOB, DocumentKind.MEETING, "doc-1")
        second = engine.segment(ALICE_BOB, DocumentKind.MEETING, "doc-1")

        assert [chunk.id for chunk in first] == [chunk.id for chunk in second]
        assert all(len(chunk.id) == 16 for chunk in first)

    def test_chunk_ids_depend_on_document(self, engine: SegmentationEngine) -> None:
        first = engine.segment(ALICE_BOB, DocumentKind.MEETING, "doc-1")
        other = engine.segment(ALICE_BOB, DocumentKind.MEETING, "doc-2")

        assert first[0].id != other[0].id

    @pytest.mark.parametrize(
        "budgets",
        [
            {"min_tokens": 0},
            {"min_tokens": 1200, "target_tokens": 1000},
            {"target_tokens": 1400, "overlap_tokens": 200, "max_tokens": 1500},
        ],
    )
    def test_inconsistent_budgets_raise_configuration_error(self, budgets: dict) -> None:
        with pytest.raises(ConfigurationError):
            SegmentationEngine(**budgets)
