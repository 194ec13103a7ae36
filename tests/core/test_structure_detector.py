"""
Test suite for StructureDetector and speaker/header line helpers.

System role: Verification of the first pipeline stage
"""

import pytest

from meeting_indexer.core.segmentation import StructureDetector
from meeting_indexer.core.segmentation.structure_detector import (
    header_text,
    parse_speaker_line,
    parse_timestamp,
)


@pytest.fixture
def detector() -> StructureDetector:
    return StructureDetector()


class TestSpeakerDetection:
    """Test suite for speaker-turn detection."""

    def test_detects_plain_speaker_lines(self, detector: StructureDetector) -> None:
        """Test 'Name:' at line start sets has_speakers."""
        # Arrange
        text = "Alice: Morning all.\nBob: Morning."

        # Act
        structure = detector.detect(text)

        # Assert
        assert structure.has_speakers is True

    def test_detects_timestamped_two_word_speaker(self, detector: StructureDetector) -> None:
        """Test bracketed timestamp and two-word name are accepted."""
        assert detector.detect("[00:01:05] Mary Jane: Quick update.").has_speakers is True

    def test_prose_has_no_speakers(self, detector: StructureDetector) -> None:
        """Test ordinary prose is not mistaken for a transcript."""
        assert detector.detect("the meeting started late: nobody minded.").has_speakers is False

    def test_parse_speaker_line_returns_name_and_seconds(self) -> None:
        """Test timestamp is converted to seconds."""
        assert parse_speaker_line("[01:30] Alice: hi") == ("Alice", 90.0)
        assert parse_speaker_line("Bob: hi") == ("Bob", None)
        assert parse_speaker_line("no speaker here") is None

    def test_parse_timestamp_handles_hours(self) -> None:
        """Test h:mm:ss form."""
        assert parse_timestamp("1:02:03") == 3723.0


class TestHeaderDetection:
    """Test suite for header detection."""

    def test_collects_markdown_caps_and_numbered_headers(self, detector: StructureDetector) -> None:
        """Test all three header forms contribute to the header list."""
        # Arrange
        text = "# Overview\nbody text\nBUDGET REVIEW\nmore text\n1. Next Steps\nfinal text"

        # Act
        structure = detector.detect(text)

        # Assert
        assert structure.has_headers is True
        assert structure.headers == ["Overview", "BUDGET REVIEW", "1. Next Steps"]

    def test_duplicate_headers_are_preserved(self, detector: StructureDetector) -> None:
        """Test duplicates stay in the list."""
        structure = detector.detect("## Notes\nx\n## Notes\ny")
        assert structure.headers == ["Notes", "Notes"]

    def test_consecutive_caps_lines_are_separate_headers(self, detector: StructureDetector) -> None:
        """Test an ALL-CAPS capture never spans a line break."""
        # Act
        structure = detector.detect("OVERVIEW\nGOALS\nbody text here.")

        # Assert
        assert structure.headers == ["OVERVIEW", "GOALS"]

    @pytest.mark.parametrize("text", ["OK\n\nthe rest is prose.", "AI\n\nmore prose here.", "#\nNot a header"])
    def test_short_line_before_blank_line_is_not_a_header(
        self, detector: StructureDetector, text: str
    ) -> None:
        """Test blank lines do not extend a short line into a header."""
        structure = detector.detect(text)

        assert structure.has_headers is False
        assert structure.headers == []

    def test_detect_agrees_with_header_text(self, detector: StructureDetector) -> None:
        """Test every detected header is also recognised line by line."""
        text = "OVERVIEW\nGOALS\n\nOK\n\n## Plan\n2. Next Steps\nprose line."

        structure = detector.detect(text)

        per_line = [header_text(line) for line in text.splitlines()]
        assert sorted(structure.headers) == sorted(h for h in per_line if h is not None)

    def test_header_text_for_single_lines(self) -> None:
        """Test header_text matches one line at a time."""
        assert header_text("### Risks") == "Risks"
        assert header_text("just a sentence.") is None

    @pytest.mark.parametrize("text", ["", "   \n\t"])
    def test_blank_input_yields_empty_structure(self, detector: StructureDetector, text: str) -> None:
        """Test degenerate input never raises."""
        structure = detector.detect(text)
        assert structure.has_speakers is False
        assert structure.has_headers is False
        assert structure.headers == []
