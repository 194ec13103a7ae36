"""
Vector blob codec.

Vectors are stored as packed float32 values in native byte order with
their Euclidean magnitude alongside, so cosine similarity needs only one
dot product per stored vector.

Dependencies: numpy
System role: Encoding shared by the vectorization worker and search service
"""

from typing import Sequence

import numpy as np

VECTOR_DTYPE = np.float32


def encode_vector(vector: Sequence[float] | np.ndarray) -> bytes:
    """Pack a vector as float32 bytes."""
    return np.asarray(vector, dtype=VECTOR_DTYPE).tobytes()


def decode_vector(blob: bytes) -> np.ndarray:
    """Unpack float32 bytes produced by ``encode_vector``."""
    return np.frombuffer(blob, dtype=VECTOR_DTYPE)


def vector_magnitude(vector: Sequence[float] | np.ndarray) -> float:
    """Euclidean norm, computed at float32 precision."""
    return float(np.linalg.norm(np.asarray(vector, dtype=VECTOR_DTYPE)))


def cosine_similarity(
    query: Sequence[float] | np.ndarray,
    blob: bytes,
    stored_magnitude: float,
    query_magnitude: float | None = None,
) -> float:
    """
    Cosine similarity between a query vector and a stored blob.

    Args:
        query: Query vector
        blob: Stored float32 bytes
        stored_magnitude: Precomputed magnitude of the stored vector
        query_magnitude: Precomputed query magnitude (computed if None)

    Returns:
        float: Similarity in [-1, 1]; 0.0 when either magnitude is zero
    """
    query_array = np.asarray(query, dtype=VECTOR_DTYPE)
    stored = decode_vector(blob)
    if query_array.shape != stored.shape:
        raise ValueError(
            f"Vector dimension mismatch: query={query_array.shape[0]} stored={stored.shape[0]}"
        )

    if query_magnitude is None:
        query_magnitude = float(np.linalg.norm(query_array))
    if query_magnitude == 0 or stored_magnitude == 0:
        return 0.0
    return float(np.dot(query_array, stored) / (query_magnitude * stored_magnitude))
