"""
Pattern-based entity extraction.

Applies the typed rule table over a whole document, merges near-duplicate
values by normalized edit distance, then attaches entities to the chunks
whose text contains them and classifies sentiment for chunks that carry
decisions or risks.

Dependencies: re (stdlib), meeting_indexer.models
System role: Third stage of the chunking pipeline (pure, synchronous)
"""

import logging
import re

from meeting_indexer.core.exceptions import EntityExtractionError
from meeting_indexer.core.extraction.patterns import EntityPatternConfig, PatternRule
from meeting_indexer.core.extraction.similarity import similarity_score
from meeting_indexer.models import Chunk, EntityType, ExtractedEntity, Sentiment
from meeting_indexer.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

POSITIVE_LEXICON = re.compile(
    r"success|achieved|completed|excellent|great|good|resolved|approved",
    re.IGNORECASE,
)
NEGATIVE_LEXICON = re.compile(
    r"fail|problem|issue|risk|concern|delay|blocked|rejected",
    re.IGNORECASE,
)

SENTIMENT_TRIGGER_TYPES = frozenset({EntityType.DECISION, EntityType.RISK})


def analyze_sentiment(text: str) -> Sentiment:
    """
    Classify tone by lexicon hit counts.

    Positive when positive hits exceed twice the negative ones, negative
    for the reverse, mixed when both occur, neutral otherwise.
    """
    positive = len(POSITIVE_LEXICON.findall(text))
    negative = len(NEGATIVE_LEXICON.findall(text))

    if positive > negative * 2:
        return Sentiment.POSITIVE
    if negative > positive * 2:
        return Sentiment.NEGATIVE
    if positive and negative:
        return Sentiment.MIXED
    return Sentiment.NEUTRAL


class EntityExtractor:
    """Extract typed, confidence-scored entities from text."""

    def __init__(self, config: EntityPatternConfig | None = None) -> None:
        """
        Initialize extractor with a rule table.

        Args:
            config: Pattern rules and thresholds (production defaults if None)
        """
        self._config = config or EntityPatternConfig.default()

    @property
    def config(self) -> EntityPatternConfig:
        return self._config

    def extract(self, text: str) -> dict[EntityType, list[ExtractedEntity]]:
        """
        Extract entities of every configured type.

        Each type is processed in isolation: a rule that fails to compile
        or match is logged and leaves that type empty, other types are
        unaffected.

        Args:
            text: Full document text

        Returns:
            dict: Entity type -> deduplicated entities sorted by confidence (desc)
        """
        entities: dict[EntityType, list[ExtractedEntity]] = {}
        for entity_type, rules in self._config.rules.items():
            try:
                entities[entity_type] = self._extract_type(text, entity_type, rules)
            except Exception as e:
                log_exception_with_context(
                    logger,
                    f"{__name__}:extract - Skipping entity type after rule failure",
                    e,
                    entity_type=entity_type.value,
                )
                entities[entity_type] = []
        return entities

    def _extract_type(
        self,
        text: str,
        entity_type: EntityType,
        rules: list[PatternRule],
    ) -> list[ExtractedEntity]:
        collected: list[ExtractedEntity] = []
        if not text:
            return collected

        for rule in rules:
            try:
                pattern = rule.compile()
            except re.error as e:
                raise EntityExtractionError(
                    f"Malformed pattern: {e}",
                    entity_type=entity_type.value,
                    details={"pattern": rule.pattern},
                ) from e

            for match in pattern.finditer(text):
                raw = match.group(1) if pattern.groups else None
                value = raw.strip() if raw else ""
                if len(value) < self._config.min_value_length:
                    continue
                self._merge(collected, entity_type, value, rule.confidence, match.start(), text)

        # sort is stable: equal confidences keep discovery order
        collected.sort(key=lambda entity: entity.confidence, reverse=True)
        return collected

    def _merge(
        self,
        collected: list[ExtractedEntity],
        entity_type: EntityType,
        value: str,
        confidence: float,
        offset: int,
        text: str,
    ) -> None:
        lowered = value.lower()
        for existing in collected:
            if similarity_score(existing.value.lower(), lowered) > self._config.similarity_threshold:
                existing.confidence = max(existing.confidence, confidence)
                return

        window = self._config.context_window
        collected.append(
            ExtractedEntity(
                type=entity_type,
                value=value,
                confidence=confidence,
                source_position=offset,
                context_window=text[max(0, offset - window) : offset + window],
            )
        )

    def attach(
        self,
        chunks: list[Chunk],
        entities: dict[EntityType, list[ExtractedEntity]],
    ) -> list[Chunk]:
        """
        Attach document entities to the chunks containing their values.

        Containment is a case-insensitive substring test. Per chunk, entities
        are deduplicated by (type, lowercased value) keeping the highest
        confidence. Chunks carrying a decision or risk get a sentiment.

        Args:
            chunks: Segmented chunks (mutated in place)
            entities: Output of ``extract``

        Returns:
            list[Chunk]: The same chunks, annotated
        """
        candidates = [
            (entity, entity.value.lower())
            for type_entities in entities.values()
            for entity in type_entities
        ]

        for chunk in chunks:
            content = chunk.content.lower()
            attached: dict[tuple[EntityType, str], ExtractedEntity] = {}
            for entity, needle in candidates:
                if needle not in content:
                    continue
                current = attached.get(entity.key)
                if current is None or entity.confidence > current.confidence:
                    attached[entity.key] = entity.model_copy()

            chunk.entities = sorted(attached.values(), key=lambda e: e.confidence, reverse=True)
            if any(entity.type in SENTIMENT_TRIGGER_TYPES for entity in chunk.entities):
                chunk.sentiment = analyze_sentiment(chunk.content)

        return chunks
