"""
Segmentation engine.

Splits raw text into ordered, token-bounded chunks using one of three
strategies: speaker-aware (transcripts), topic/header-aware (structured
documents) and sliding-window (plain prose, and oversized sections).

Dependencies: hashlib, math (stdlib), meeting_indexer.models
System role: Second stage of the chunking pipeline (pure, synchronous)
"""

import hashlib
import logging
import math

from meeting_indexer.core.exceptions import ConfigurationError
from meeting_indexer.core.segmentation.structure_detector import (
    StructureDetector,
    header_text,
    parse_speaker_line,
)
from meeting_indexer.core.segmentation.text_stats import (
    CHARS_PER_TOKEN,
    calculate_importance,
    estimate_tokens,
    extract_topics,
    split_oversized,
    split_sentences,
)
from meeting_indexer.models import (
    Chunk,
    ChunkingStrategy,
    ChunkType,
    DocumentKind,
    DocumentStructure,
)

logger = logging.getLogger(__name__)

SPEAKER_OVERLAP_RATIO = 0.1
WINDOW_OVERLAP_RATIO = 0.2
CONTEXT_LINES = 3
DEFAULT_SECTION_HEADER = "Introduction"

SPEAKER_KINDS = frozenset({DocumentKind.MEETING, DocumentKind.CHAT})


def generate_chunk_id(content: str, document_id: str, sort_key: str) -> str:
    """
    Generate deterministic chunk ID from content and placement.

    Args:
        content: Chunk text content
        document_id: Owning document identifier
        sort_key: Path-like ordering key of the chunk

    Returns:
        str: First 16 hex chars of SHA-256(content:document_id:sort_key)
    """
    hash_input = f"{content}:{document_id}:{sort_key}"
    return hashlib.sha256(hash_input.encode()).hexdigest()[:16]


def generate_section_id(document_id: str, index: int, header: str) -> str:
    """Synthetic identifier for an oversized section that was split into sub-chunks."""
    hash_input = f"section:{document_id}:{index}:{header}"
    return hashlib.sha256(hash_input.encode()).hexdigest()[:16]


def _sort_key(*parts: int) -> str:
    head, *rest = parts
    return ".".join([f"{head:06d}", *(f"{part:04d}" for part in rest)])


class SegmentationEngine:
    """Split raw text into ordered chunks within a token budget."""

    def __init__(
        self,
        max_tokens: int = 1500,
        min_tokens: int = 100,
        overlap_tokens: int = 200,
        target_tokens: int = 1000,
        detector: StructureDetector | None = None,
    ) -> None:
        """
        Initialize engine with token budgets.

        Args:
            max_tokens: Hard ceiling per chunk
            min_tokens: Trailing chunks below this merge into their predecessor
            overlap_tokens: Maximum overlap carried into the next chunk
            target_tokens: Flush threshold per chunk
            detector: Structure detector (default instance if None)

        Raises:
            ConfigurationError: Budgets are inconsistent
        """
        if not 0 < min_tokens <= target_tokens <= max_tokens:
            raise ConfigurationError(
                "Chunk budgets must satisfy 0 < min_tokens <= target_tokens <= max_tokens",
                setting="chunking",
                details={"min": min_tokens, "target": target_tokens, "max": max_tokens},
            )
        if overlap_tokens < 0 or target_tokens + overlap_tokens > max_tokens:
            raise ConfigurationError(
                "overlap_tokens must be >= 0 and target_tokens + overlap_tokens <= max_tokens",
                setting="chunking.overlap_tokens",
                details={"overlap": overlap_tokens, "target": target_tokens, "max": max_tokens},
            )

        self.max_tokens = max_tokens
        self.min_tokens = min_tokens
        self.overlap_tokens = overlap_tokens
        self.target_tokens = target_tokens
        self._detector = detector or StructureDetector()

    def select_strategy(
        self,
        structure: DocumentStructure,
        kind: DocumentKind,
    ) -> ChunkingStrategy:
        """Pick the strategy for a document of ``kind`` with ``structure``."""
        if kind in SPEAKER_KINDS and structure.has_speakers:
            return ChunkingStrategy.SPEAKER_AWARE
        if structure.has_headers:
            return ChunkingStrategy.TOPIC_AWARE
        return ChunkingStrategy.SLIDING_WINDOW

    def segment(
        self,
        text: str,
        kind: DocumentKind = DocumentKind.DOCUMENT,
        document_id: str = "",
        structure: DocumentStructure | None = None,
    ) -> list[Chunk]:
        """
        Segment text into linked chunks.

        Args:
            text: Raw document text
            kind: Caller-supplied document kind
            document_id: Identifier mixed into chunk IDs
            structure: Precomputed structure (detected if None)

        Returns:
            list[Chunk]: Chunks in reading order with previous/next links;
            empty for blank input
        """
        if not text or not text.strip():
            return []

        structure = structure or self._detector.detect(text)
        strategy = self.select_strategy(structure, kind)

        if strategy is ChunkingStrategy.SPEAKER_AWARE:
            chunks = self._speaker_chunks(text, document_id)
        elif strategy is ChunkingStrategy.TOPIC_AWARE:
            chunks = self._topic_chunks(text, document_id)
        else:
            chunks = self._window_chunks(text, document_id)

        self._link(chunks)

        logger.debug(
            f"{__name__}:segment - Segmented document",
            extra={
                "document_id": document_id,
                "strategy": strategy.value,
                "chunk_count": len(chunks),
            },
        )
        return chunks

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _speaker_chunks(self, text: str, document_id: str) -> list[Chunk]:
        turns: list[tuple[str, str | None, float | None]] = []
        buffer: list[str] = []
        fresh = 0
        speaker: str | None = None
        start_time: float | None = None

        def flush() -> None:
            content = "\n".join(buffer).strip()
            if fresh and content:
                turns.append((content, speaker, start_time))

        for line in text.split("\n"):
            parsed = parse_speaker_line(line)
            if parsed is not None and parsed[0] != speaker:
                flush()
                buffer, fresh = [], 0
                speaker, start_time = parsed

            buffer.append(line)
            if line.strip():
                fresh += 1

            if estimate_tokens("\n".join(buffer)) >= self.target_tokens:
                flush()
                buffer = self._line_overlap(buffer)
                fresh = 0

        flush()

        chunks: list[Chunk] = []
        for content, turn_speaker, turn_start in turns:
            pieces = (
                self._window_pieces(content)
                if estimate_tokens(content) > self.max_tokens
                else [content]
            )
            for piece in pieces:
                index = len(chunks)
                chunks.append(
                    self._build_chunk(
                        document_id,
                        piece,
                        position=float(index),
                        sort_key=_sort_key(index),
                        chunk_type=ChunkType.SPEAKER_TURN,
                        speaker=turn_speaker,
                        start_time=turn_start,
                    )
                )

        for current, following in zip(chunks, chunks[1:]):
            if (
                current.start_time is not None
                and following.start_time is not None
                and following.start_time >= current.start_time
            ):
                current.end_time = following.start_time

        for i, chunk in enumerate(chunks):
            if i > 0:
                chunk.context_before = "\n".join(chunks[i - 1].content.split("\n")[-CONTEXT_LINES:])
            if i < len(chunks) - 1:
                chunk.context_after = "\n".join(chunks[i + 1].content.split("\n")[:CONTEXT_LINES])

        return chunks

    def _topic_chunks(self, text: str, document_id: str) -> list[Chunk]:
        chunks: list[Chunk] = []

        for i, (header, content) in enumerate(self._split_sections(text)):
            if estimate_tokens(content) <= self.max_tokens:
                chunks.append(
                    self._build_chunk(
                        document_id,
                        content,
                        position=float(i),
                        sort_key=_sort_key(i),
                        chunk_type=ChunkType.TOPIC_SEGMENT,
                        topics=[header],
                    )
                )
                continue

            pieces = self._window_pieces(content)
            parent_id = generate_section_id(document_id, i, header)
            # Keep every sub-chunk strictly inside (i, i + 1)
            step = min(0.1, 1.0 / (len(pieces) + 1))
            for j, piece in enumerate(pieces):
                chunks.append(
                    self._build_chunk(
                        document_id,
                        piece,
                        position=round(i + (j + 1) * step, 6),
                        sort_key=_sort_key(i, j + 1),
                        chunk_type=ChunkType.SLIDING_WINDOW,
                        parent_chunk_id=parent_id,
                    )
                )

        return chunks

    def _window_chunks(self, text: str, document_id: str) -> list[Chunk]:
        return [
            self._build_chunk(
                document_id,
                piece,
                position=float(index),
                sort_key=_sort_key(index),
                chunk_type=ChunkType.SLIDING_WINDOW,
            )
            for index, piece in enumerate(self._window_pieces(text))
        ]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _split_sections(self, text: str) -> list[tuple[str, str]]:
        """
        Split text at header lines.

        Header lines stay in their section; a section holding only header
        lines is carried into the next one.
        """
        sections: list[tuple[str, str]] = []
        header = DEFAULT_SECTION_HEADER
        lines: list[str] = []
        has_body = False

        for line in text.split("\n"):
            found = header_text(line)
            if found is not None:
                if has_body:
                    sections.append((header, "\n".join(lines).strip()))
                    lines = []
                header = found
                has_body = False
                lines.append(line)
                continue

            lines.append(line)
            if line.strip():
                has_body = True

        remainder = "\n".join(lines).strip()
        if remainder:
            sections.append((header, remainder))
        return sections

    def _window_pieces(self, text: str) -> list[str]:
        """Sliding-window split of prose into overlapping sentence groups."""
        sentences: list[str] = []
        for sentence in split_sentences(text):
            sentences.extend(split_oversized(sentence, self.target_tokens))
        if not sentences:
            return []

        target_chars = self.target_tokens * CHARS_PER_TOKEN
        pieces: list[str] = []
        current: list[str] = []
        current_chars = 0
        fresh = 0

        for sentence in sentences:
            added = len(sentence) + (1 if current else 0)
            if current and fresh and current_chars + added > target_chars:
                pieces.append(" ".join(current))
                current = self._sentence_overlap(current)
                current_chars = len(" ".join(current))
                fresh = 0
                added = len(sentence) + (1 if current else 0)

            current.append(sentence)
            current_chars += added
            fresh += 1

        if fresh:
            tail = " ".join(current)
            if pieces and estimate_tokens(tail) < self.min_tokens:
                merged = f"{pieces[-1]} {' '.join(current[-fresh:])}"
                if estimate_tokens(merged) <= self.max_tokens:
                    pieces[-1] = merged
                    return pieces
            pieces.append(tail)

        return pieces

    def _sentence_overlap(self, sentences: list[str]) -> list[str]:
        keep = math.ceil(len(sentences) * WINDOW_OVERLAP_RATIO)
        tail = sentences[-keep:] if keep else []
        while tail and estimate_tokens(" ".join(tail)) > self.overlap_tokens:
            tail = tail[1:]
        return tail

    def _line_overlap(self, lines: list[str]) -> list[str]:
        keep = math.floor(len(lines) * SPEAKER_OVERLAP_RATIO)
        tail = lines[-keep:] if keep else []
        while tail and estimate_tokens("\n".join(tail)) > self.overlap_tokens:
            tail = tail[1:]
        return tail

    def _build_chunk(
        self,
        document_id: str,
        content: str,
        position: float,
        sort_key: str,
        chunk_type: ChunkType,
        topics: list[str] | None = None,
        **fields,
    ) -> Chunk:
        return Chunk(
            id=generate_chunk_id(content, document_id, sort_key),
            document_id=document_id,
            content=content,
            position=position,
            sort_key=sort_key,
            type=chunk_type,
            token_count=estimate_tokens(content),
            importance=calculate_importance(content),
            topics=topics if topics is not None else extract_topics(content),
            **fields,
        )

    @staticmethod
    def _link(chunks: list[Chunk]) -> None:
        for previous, current in zip(chunks, chunks[1:]):
            previous.next_chunk_id = current.id
            current.previous_chunk_id = previous.id
