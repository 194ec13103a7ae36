"""
Text statistics used while building chunks.

Token estimation, sentence splitting, keyword topics and the importance
heuristic. All functions are pure.

Dependencies: re, math, collections (stdlib), langchain_text_splitters
System role: Shared helpers for the segmentation engine
"""

import math
import re
from collections import Counter

from langchain_text_splitters import RecursiveCharacterTextSplitter

CHARS_PER_TOKEN = 4
MAX_TOPICS = 5

_SENTENCE = re.compile(r"[^.!?]*[.!?]+|[^.!?]+$")
_TOPIC_WORD = re.compile(r"\b[a-z]{4,}\b")

STOP_WORDS = frozenset(
    {
        "this", "that", "these", "those", "will", "would", "could", "should",
        "have", "with", "from", "they", "them", "there", "their", "what",
        "when", "where", "which", "were", "been", "about", "also", "just",
        "into", "than", "then", "your", "yeah", "okay",
    }
)

_IMPORTANCE_BOOSTS: tuple[tuple[re.Pattern, float], ...] = (
    (re.compile(r"decision|decided|agreed|resolved", re.IGNORECASE), 0.2),
    (re.compile(r"action item|todo|task|follow.?up", re.IGNORECASE), 0.15),
    (re.compile(r"risk|issue|concern|problem|blocker", re.IGNORECASE), 0.15),
    (re.compile(r"milestone|deadline|deliverable|launch", re.IGNORECASE), 0.1),
)


def estimate_tokens(text: str) -> int:
    """Approximate token count as characters / 4, rounded up."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def split_sentences(text: str) -> list[str]:
    """
    Split prose into sentences on terminal punctuation.

    Trailing text without punctuation is kept as a final sentence.
    """
    sentences = [match.group(0).strip() for match in _SENTENCE.finditer(text)]
    return [sentence for sentence in sentences if sentence]


def split_oversized(sentence: str, max_tokens: int) -> list[str]:
    """
    Cut a sentence longer than ``max_tokens`` into pieces within the budget.

    Splits on line breaks, then spaces; a single word longer than the
    budget is cut by characters.
    """
    if estimate_tokens(sentence) <= max_tokens:
        return [sentence]

    splitter = RecursiveCharacterTextSplitter(
        chunk_size=max_tokens * CHARS_PER_TOKEN,
        chunk_overlap=0,
        separators=["\n", " ", ""],
        length_function=len,
    )
    return splitter.split_text(sentence)


def extract_topics(text: str, limit: int = MAX_TOPICS) -> list[str]:
    """Most frequent lowercase words of 4+ letters, ties broken by first occurrence."""
    words = [word for word in _TOPIC_WORD.findall(text.lower()) if word not in STOP_WORDS]
    # Counter.most_common keeps insertion order for equal counts
    return [word for word, _ in Counter(words).most_common(limit)]


def calculate_importance(text: str) -> float:
    """Base 0.5 plus keyword boosts for decisions, actions, risks and milestones."""
    score = 0.5
    for pattern, boost in _IMPORTANCE_BOOSTS:
        if pattern.search(text):
            score += boost
    return min(1.0, round(score, 4))
