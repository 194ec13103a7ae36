"""
Test suite for text statistics helpers.

System role: Verification of token estimates and sentence splitting
"""

import pytest

from meeting_indexer.core.segmentation.text_stats import (
    calculate_importance,
    estimate_tokens,
    extract_topics,
    split_oversized,
    split_sentences,
)


class TestEstimateTokens:
    """Test suite for estimate_tokens()."""

    @pytest.mark.parametrize(("text", "expected"), [("", 0), ("abc", 1), ("abcd", 1), ("abcde", 2)])
    def test_rounds_up_characters_over_four(self, text: str, expected: int) -> None:
        assert estimate_tokens(text) == expected


class TestSplitSentences:
    """Test suite for split_sentences()."""

    def test_keeps_trailing_text_without_punctuation(self) -> None:
        assert split_sentences("First one. Second one! And a tail") == [
            "First one.",
            "Second one!",
            "And a tail",
        ]


class TestSplitOversized:
    """Test suite for split_oversized()."""

    def test_sentence_within_budget_is_returned_unchanged(self) -> None:
        assert split_oversized("A short sentence.", 10) == ["A short sentence."]

    def test_long_sentence_is_cut_on_whitespace_within_budget(self) -> None:
        """Test every piece fits and every word survives in order."""
        # Arrange
        words = [f"word{index}" for index in range(200)]
        sentence = " ".join(words) + "."

        # Act
        pieces = split_oversized(sentence, 10)

        # Assert
        assert len(pieces) > 1
        assert all(estimate_tokens(piece) <= 10 for piece in pieces)
        assert " ".join(pieces).split() == sentence.split()

    def test_word_longer_than_budget_is_cut_by_characters(self) -> None:
        # Arrange
        word = "x" * 100

        # Act
        pieces = split_oversized(word, 10)

        # Assert
        assert all(len(piece) <= 40 for piece in pieces)
        assert "".join(pieces) == word

    def test_line_breaks_inside_a_sentence_do_not_cut_words(self) -> None:
        """Test words joined by newlines are never split mid-word."""
        sentence = "\n".join(f"item{index}" for index in range(100))

        pieces = split_oversized(sentence, 10)

        assert all(estimate_tokens(piece) <= 10 for piece in pieces)
        assert [word for piece in pieces for word in piece.split()] == sentence.split()


class TestScoring:
    """Test suite for importance and topic helpers."""

    def test_importance_adds_keyword_boosts(self) -> None:
        assert calculate_importance("plain words") == 0.5
        assert calculate_importance("We decided on the launch deadline") == 0.8

    def test_topics_skip_stop_words_and_short_words(self) -> None:
        assert extract_topics("budget budget hiring that that the plan") == ["budget", "hiring", "plan"]
