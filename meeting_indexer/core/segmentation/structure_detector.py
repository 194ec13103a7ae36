"""
Document structure detection.

Classifies raw text before segmentation: does it contain speaker turns,
and which lines look like section headers.

Dependencies: re (stdlib)
System role: First stage of the chunking pipeline (pure, no side effects)
"""

import re

from meeting_indexer.models import DocumentStructure

# Optional [mm:ss] timestamp, then a one- or two-word capitalised name and a colon
SPEAKER_LINE = re.compile(r"^(?:\[(\d+(?::\d+){1,2})\])?\s*([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)\s*:")

HEADER_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"^#{1,6}[ \t]+(.+)$"),  # markdown
    re.compile(r"^([A-Z][A-Z \t]{2,})$"),  # ALL CAPS
    re.compile(r"^(\d+\.[ \t]+[A-Z].+)$"),  # numbered sections
)


def parse_timestamp(raw: str) -> float:
    """Convert ``mm:ss`` or ``h:mm:ss`` to seconds."""
    seconds = 0
    for part in raw.split(":"):
        seconds = seconds * 60 + int(part)
    return float(seconds)


def parse_speaker_line(line: str) -> tuple[str, float | None] | None:
    """
    Match a speaker-turn opening line.

    Args:
        line: Single line of text

    Returns:
        (speaker, start_seconds) when the line opens a turn, else None
    """
    match = SPEAKER_LINE.match(line)
    if not match:
        return None
    timestamp = parse_timestamp(match.group(1)) if match.group(1) else None
    return match.group(2), timestamp


def header_text(line: str) -> str | None:
    """
    Return the header captured from a single line, or None.

    Args:
        line: Single line of text (no trailing newline)
    """
    stripped = line.rstrip("\r")
    for pattern in HEADER_PATTERNS:
        match = pattern.match(stripped)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


class StructureDetector:
    """Detect speaker turns and headers in raw text."""

    def detect(self, text: str) -> DocumentStructure:
        """
        Classify text structure.

        Header captures are collected pattern by pattern, in document order
        within each pattern; duplicates are preserved. Every pattern is
        matched against one line at a time.

        Args:
            text: Raw document text

        Returns:
            DocumentStructure: Speaker flag, header flag and header list
        """
        if not text or not text.strip():
            return DocumentStructure()

        lines = text.splitlines()
        has_speakers = any(SPEAKER_LINE.match(line) for line in lines)

        headers: list[str] = []
        for pattern in HEADER_PATTERNS:
            for line in lines:
                match = pattern.match(line)
                if match and match.group(1).strip():
                    headers.append(match.group(1).strip())

        return DocumentStructure(
            has_speakers=has_speakers,
            has_headers=bool(headers),
            headers=headers,
        )
