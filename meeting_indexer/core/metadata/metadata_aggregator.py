"""
Metadata aggregator.

Rolls chunks and entities into a document summary: token totals, topic
and speaker sets, the entity index by type and a chronological timeline
of decisions, action items, milestones and risks.

Dependencies: re (stdlib), meeting_indexer.models
System role: Fifth stage of the chunking pipeline (pure, synchronous)
"""

import re

from meeting_indexer.models import (
    TIMELINE_ENTITY_TYPES,
    Chunk,
    DocumentMetadata,
    EntityType,
    ExtractedEntity,
    TimelineEvent,
)

ASSIGNEE_PATTERN = re.compile(r"(?:assigned to|owner|assignee):?\s*([^,\n]+)", re.IGNORECASE)
DUE_DATE_PATTERN = re.compile(r"(?:due|deadline):?\s*([^,\n]+)", re.IGNORECASE)

_SUMMARY_LABELS: tuple[tuple[EntityType, str], ...] = (
    (EntityType.DECISION, "decision"),
    (EntityType.ACTION_ITEM, "action item"),
    (EntityType.RISK, "risk"),
    (EntityType.MILESTONE, "milestone"),
)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def action_item_details(context: str) -> tuple[str | None, str | None]:
    """
    Pull an assignee and due date out of an action item's context window.

    Returns:
        (assignee, due_date), each None when absent
    """
    assignee = ASSIGNEE_PATTERN.search(context)
    due_date = DUE_DATE_PATTERN.search(context)
    return (
        assignee.group(1).strip() if assignee else None,
        due_date.group(1).strip() if due_date else None,
    )


class MetadataAggregator:
    """Build DocumentMetadata from annotated chunks."""

    def aggregate(
        self,
        chunks: list[Chunk],
        entities: dict[EntityType, list[ExtractedEntity]],
    ) -> DocumentMetadata:
        """
        Aggregate chunk-level data into document metadata.

        Timeline events use the chunk start time when known and fall back to
        the chunk position; the sort is stable so events within one chunk
        keep their entity order.

        Args:
            chunks: Chunks with entities attached
            entities: Document-level entity index by type

        Returns:
            DocumentMetadata: Aggregate summary
        """
        topics: dict[str, None] = {}
        speakers: dict[str, None] = {}
        timeline: list[TimelineEvent] = []

        for chunk in chunks:
            topics.update(dict.fromkeys(chunk.topics))
            if chunk.speaker:
                speakers[chunk.speaker] = None

            timestamp = chunk.start_time if chunk.start_time is not None else chunk.position
            for entity in chunk.entities:
                if entity.type not in TIMELINE_ENTITY_TYPES:
                    continue
                assignee, due_date = (
                    action_item_details(entity.context_window)
                    if entity.type is EntityType.ACTION_ITEM
                    else (None, None)
                )
                timeline.append(
                    TimelineEvent(
                        timestamp=timestamp,
                        type=entity.type,
                        description=entity.value,
                        source_chunk_id=chunk.id,
                        confidence=entity.confidence,
                        assignee=assignee,
                        due_date=due_date,
                    )
                )

        timeline.sort(key=lambda event: event.timestamp)

        return DocumentMetadata(
            total_tokens=sum(chunk.token_count for chunk in chunks),
            chunk_count=len(chunks),
            entities=entities,
            topics=list(topics),
            speakers=list(speakers) or None,
            timeline=timeline or None,
            summary=self._summarize(chunks, list(speakers), entities),
        )

    @staticmethod
    def _summarize(
        chunks: list[Chunk],
        speakers: list[str],
        entities: dict[EntityType, list[ExtractedEntity]],
    ) -> str | None:
        if not chunks:
            return None
        parts = [_plural(len(chunks), "chunk")]
        if speakers:
            parts.append(_plural(len(speakers), "speaker"))
        for entity_type, label in _SUMMARY_LABELS:
            count = len(entities.get(entity_type, []))
            if count:
                parts.append(_plural(count, label))
        return ", ".join(parts)
