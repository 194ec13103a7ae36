"""Entity extraction: rule table, similarity scoring and the extractor."""

from meeting_indexer.core.extraction.entity_extractor import EntityExtractor, analyze_sentiment
from meeting_indexer.core.extraction.patterns import EntityPatternConfig, PatternRule
from meeting_indexer.core.extraction.similarity import levenshtein_distance, similarity_score

__all__ = [
    "EntityExtractor",
    "EntityPatternConfig",
    "PatternRule",
    "analyze_sentiment",
    "levenshtein_distance",
    "similarity_score",
]
