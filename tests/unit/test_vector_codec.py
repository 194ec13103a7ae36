"""Unit tests for the float32 vector codec."""

import numpy as np
import pytest

from meeting_indexer.application.vector_codec import (
    cosine_similarity,
    decode_vector,
    encode_vector,
    vector_magnitude,
)


def test_encoding_is_packed_float32():
    blob = encode_vector([1.0, -2.5, 0.25])

    assert len(blob) == 12
    np.testing.assert_array_equal(decode_vector(blob), np.array([1.0, -2.5, 0.25], dtype=np.float32))


def test_magnitude():
    assert vector_magnitude([3.0, 4.0]) == pytest.approx(5.0)


def test_cosine_similarity_uses_stored_magnitude():
    stored = [1.0, 0.0]
    blob = encode_vector(stored)

    assert cosine_similarity([2.0, 0.0], blob, vector_magnitude(stored)) == pytest.approx(1.0)
    assert cosine_similarity([0.0, 3.0], blob, vector_magnitude(stored)) == pytest.approx(0.0)
    assert cosine_similarity([-1.0, 0.0], blob, 1.0, query_magnitude=1.0) == pytest.approx(-1.0)


def test_zero_magnitude_scores_zero():
    assert cosine_similarity([0.0, 0.0], encode_vector([1.0, 0.0]), 1.0) == 0.0
    assert cosine_similarity([1.0, 0.0], encode_vector([0.0, 0.0]), 0.0) == 0.0


def test_dimension_mismatch_raises():
    with pytest.raises(ValueError, match="dimension mismatch"):
        cosine_similarity([1.0, 0.0, 0.0], encode_vector([1.0, 0.0]), 1.0)
