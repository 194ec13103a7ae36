"""Chunk relationship graph construction."""

from meeting_indexer.core.relationships.relationship_builder import RelationshipBuilder, jaccard

__all__ = ["RelationshipBuilder", "jaccard"]
