"""
Entity pattern configuration.

Every confidence weight and threshold used by the entity extractor lives
in one struct, ``EntityPatternConfig``, enumerated as
``{entity_type: [PatternRule(pattern, confidence)]}``.

Dependencies: pydantic, re (stdlib)
System role: Single source of extraction rules and weights
"""

import re

from pydantic import BaseModel, Field

from meeting_indexer.models import EntityType


class PatternRule(BaseModel):
    """One regex rule; capture group 1 is the entity value."""

    pattern: str
    confidence: float = Field(gt=0.0, le=1.0)
    ignore_case: bool = False

    def compile(self) -> re.Pattern:
        """Compile the rule; raises re.error for malformed patterns."""
        return re.compile(self.pattern, re.IGNORECASE if self.ignore_case else 0)


def _rule(pattern: str, confidence: float, ignore_case: bool = False) -> PatternRule:
    return PatternRule(pattern=pattern, confidence=confidence, ignore_case=ignore_case)


_WEEKDAYS = "Monday|Tuesday|Wednesday|Thursday|Friday|Saturday|Sunday"
_MONTHS = "Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec"

DEFAULT_RULES: dict[EntityType, list[PatternRule]] = {
    EntityType.PERSON: [
        _rule(
            r"(?:^|\s)([A-Z][a-z]+(?:\s+[A-Z][a-z]+){1,3})"
            r"(?:\s+(?:said|mentioned|asked|responded|suggested|proposed|agreed|disagreed))",
            0.9,
        ),
        _rule(r"(?:^|\s)(?:Mr\.|Mrs\.|Ms\.|Dr\.|Prof\.)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)", 0.95),
        _rule(r"(?:Participants?|Attendees?|Present):\s*([^,\n]+(?:,\s*[^,\n]+)*)", 0.85, True),
        _rule(r"@([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)", 0.8),
    ],
    EntityType.PROJECT: [
        _rule(r"project\s+(?:name)?:?\s*\"?([^\"\n,]+)\"?", 0.9, True),
        _rule(
            r"(?:working on|developing|building|implementing)\s+(?:the\s+)?"
            r"([A-Z][A-Za-z0-9\s\-]{3,50})\s+(?:project|system|platform)",
            0.85,
            True,
        ),
        _rule(r"(?:for\s+)?(?:the\s+)?([A-Z][A-Za-z0-9\s\-]{3,50})\s+(?:Project|Initiative|Program)", 0.8),
    ],
    EntityType.DECISION: [
        _rule(r"(?:Decision|Decided|Agreed|Resolved|Concluded):\s*([^\n]+)", 0.95, True),
        _rule(r"(?:We|The team|It was)\s+(?:decided|agreed|resolved)\s+(?:to|that)\s+([^.!?]+)[.!?]", 0.85, True),
        _rule(r"(?:will|shall|must|should)\s+(?:now|going forward)\s+([^.!?]+)[.!?]", 0.7, True),
    ],
    EntityType.ACTION_ITEM: [
        _rule(
            r"(?:Action Item|TODO|Task|Follow-up):\s*([^\n]+)"
            r"(?:\s*-\s*(?:Owner|Assigned to|Assignee):\s*([A-Za-z\s]+))?"
            r"(?:\s*-\s*(?:Due|Deadline|By):\s*([^\n]+))?",
            0.95,
            True,
        ),
        _rule(r"(?:need to|needs to|will|shall)\s+([^.!?]+)\s+by\s+([^.!?]+)[.!?]", 0.75, True),
        _rule(r"\[\s*\]\s*([^\n]+)(?:\s*@([A-Za-z\s]+))?", 0.8),
    ],
    EntityType.DATE: [
        _rule(r"\b(\d{4}-\d{2}-\d{2})\b", 0.95),
        _rule(r"\b(\d{1,2}/\d{1,2}/\d{2,4})\b", 0.95),
        _rule(rf"\b((?:{_MONTHS})[a-z]*\s+\d{{1,2}}(?:st|nd|rd|th)?(?:,?\s+\d{{4}})?)\b", 0.9, True),
        _rule(rf"\b((?:next|last|this)\s+(?:{_WEEKDAYS}|week|month|quarter|year))\b", 0.8, True),
    ],
    EntityType.CLIENT: [
        _rule(r"(?:client|customer)\s+(?:name)?:?\s*\"?([^\"\n,]{2,50})\"?", 0.9, True),
        _rule(r"(?:for|with|from)\s+(?:client|customer)\s+([A-Z][A-Za-z0-9\s\-&]{2,50})(?:\s|,|\.)", 0.85, True),
    ],
    EntityType.RISK: [
        _rule(r"(?:Risk|Issue|Concern|Problem|Blocker):\s*([^\n]+)", 0.9, True),
        _rule(r"(?:risk|issue|concern|problem)\s+(?:is|are)\s+(?:that\s+)?([^.!?]+)[.!?]", 0.8, True),
        _rule(r"(?:may|might|could)\s+(?:cause|lead to|result in)\s+([^.!?]+)[.!?]", 0.7, True),
    ],
    EntityType.MILESTONE: [
        _rule(r"(?:Milestone|Deliverable|Deadline):\s*([^\n]+)", 0.9, True),
        _rule(r"(?:complete|deliver|finish|launch)\s+(?:by|on)\s+([^.!?]+)[.!?]", 0.75, True),
    ],
}


class EntityPatternConfig(BaseModel):
    """Rule table and thresholds for the entity extractor."""

    rules: dict[EntityType, list[PatternRule]]
    similarity_threshold: float = Field(default=0.8, ge=0.0, le=1.0)
    context_window: int = Field(default=100, ge=0)
    min_value_length: int = Field(default=2, ge=1)

    @classmethod
    def default(cls) -> "EntityPatternConfig":
        """Production rule table."""
        return cls(rules={entity_type: list(rules) for entity_type, rules in DEFAULT_RULES.items()})
