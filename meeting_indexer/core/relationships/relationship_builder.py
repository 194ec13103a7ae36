"""
Chunk relationship builder.

Derives the weighted edge set over a document's chunks. Topic and entity
edges are computed only for chunk pairs that share at least one topic or
entity key, found through inverted indexes, so unrelated pairs are never
compared.

Dependencies: itertools, collections (stdlib), meeting_indexer.models
System role: Fourth stage of the chunking pipeline (pure, synchronous)
"""

import logging
from collections import Counter, defaultdict
from itertools import combinations
from typing import Hashable, Iterable

from meeting_indexer.models import Chunk, ChunkRelationship, RelationshipType

logger = logging.getLogger(__name__)


def jaccard(first: Iterable[str], second: Iterable[str]) -> float:
    """Jaccard similarity of two collections treated as sets; 0.0 when both are empty."""
    left, right = set(first), set(second)
    union = left | right
    return len(left & right) / len(union) if union else 0.0


def _inverted_index(keyed: Iterable[tuple[int, Iterable[Hashable]]]) -> dict[Hashable, list[int]]:
    index: dict[Hashable, list[int]] = defaultdict(list)
    for position, keys in keyed:
        for key in dict.fromkeys(keys):
            index[key].append(position)
    return index


class RelationshipBuilder:
    """Build sequential, topic, speaker and entity edges between chunks."""

    def __init__(
        self,
        topic_threshold: float = 0.7,
        speaker_strength: float = 0.8,
        entity_weight: float = 0.3,
        max_chunks: int = 5000,
    ) -> None:
        """
        Initialize builder weights.

        Args:
            topic_threshold: Jaccard similarity a topic edge must exceed
            speaker_strength: Fixed weight of speaker_continuation edges
            entity_weight: Per-shared-entity weight of entity_reference edges
            max_chunks: Above this count only sequential edges are built
        """
        self._topic_threshold = topic_threshold
        self._speaker_strength = speaker_strength
        self._entity_weight = entity_weight
        self._max_chunks = max_chunks

    def build(self, chunks: list[Chunk]) -> list[ChunkRelationship]:
        """
        Build the relationship set for chunks in reading order.

        Edges always point from the earlier chunk to the later one and each
        (from, to, type) triple appears once.

        Args:
            chunks: Chunks with topics, speakers and attached entities

        Returns:
            list[ChunkRelationship]: Sequential edges first, then topic,
            speaker and entity edges ordered by chunk pair
        """
        edges: dict[tuple, ChunkRelationship] = {}

        def add(i: int, j: int, edge_type: RelationshipType, strength: float) -> None:
            edge = ChunkRelationship(
                from_chunk_id=chunks[i].id,
                to_chunk_id=chunks[j].id,
                type=edge_type,
                strength=strength,
            )
            edges.setdefault(edge.key, edge)

        for i in range(len(chunks) - 1):
            add(i, i + 1, RelationshipType.SEQUENTIAL, 1.0)

        if len(chunks) > self._max_chunks:
            logger.warning(
                f"{__name__}:build - Chunk count over limit, building sequential edges only",
                extra={"chunk_count": len(chunks), "max_chunks": self._max_chunks},
            )
            return list(edges.values())

        for i, j in self._pairs_sharing(enumerate(chunk.topics for chunk in chunks)):
            similarity = jaccard(chunks[i].topics, chunks[j].topics)
            if similarity > self._topic_threshold:
                add(i, j, RelationshipType.TOPIC_CONTINUATION, similarity)

        speakers = ((i, [chunk.speaker]) for i, chunk in enumerate(chunks) if chunk.speaker)
        for i, j in self._pairs_sharing(speakers):
            add(i, j, RelationshipType.SPEAKER_CONTINUATION, self._speaker_strength)

        shared = Counter(
            pair
            for positions in _inverted_index(
                (i, [entity.key for entity in chunk.entities]) for i, chunk in enumerate(chunks)
            ).values()
            for pair in combinations(positions, 2)
        )
        for i, j in sorted(shared):
            add(i, j, RelationshipType.ENTITY_REFERENCE, min(1.0, self._entity_weight * shared[(i, j)]))

        return list(edges.values())

    @staticmethod
    def _pairs_sharing(keyed: Iterable[tuple[int, Iterable[Hashable]]]) -> list[tuple[int, int]]:
        """Sorted (i, j) pairs, i < j, that share at least one key."""
        pairs: set[tuple[int, int]] = set()
        for positions in _inverted_index(keyed).values():
            pairs.update(combinations(positions, 2))
        return sorted(pairs)
