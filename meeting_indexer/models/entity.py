"""
Extracted entity domain model.

Dependencies: pydantic
System role: Typed, confidence-scored facts found by the entity extractor
"""

import enum

from pydantic import BaseModel, Field


class EntityType(str, enum.Enum):
    """Entity categories recognised by the extractor."""

    PERSON = "person"
    PROJECT = "project"
    DECISION = "decision"
    ACTION_ITEM = "action_item"
    DATE = "date"
    CLIENT = "client"
    RISK = "risk"
    MILESTONE = "milestone"


# Entity types that become timeline events
TIMELINE_ENTITY_TYPES = frozenset(
    {
        EntityType.DECISION,
        EntityType.ACTION_ITEM,
        EntityType.MILESTONE,
        EntityType.RISK,
    }
)


class ExtractedEntity(BaseModel):
    """A typed value matched in the source text."""

    type: EntityType = Field(description="Entity category")
    value: str = Field(min_length=2, description="Trimmed captured text")
    confidence: float = Field(gt=0.0, le=1.0, description="Rule-assigned confidence")
    source_position: int = Field(ge=0, description="Character offset of the first match")
    context_window: str = Field(default="", description="Text surrounding the first match")

    @property
    def key(self) -> tuple[EntityType, str]:
        """Identity used for per-chunk dedup and shared-entity matching."""
        return self.type, self.value.lower()
