"""
String similarity for entity deduplication.

Dependencies: None
System role: Normalized edit-distance scoring
"""


def levenshtein_distance(first: str, second: str) -> int:
    """Edit distance with unit insert/delete/substitute costs (two-row DP)."""
    if len(first) < len(second):
        first, second = second, first
    if not second:
        return len(first)

    previous = list(range(len(second) + 1))
    for i, left in enumerate(first, start=1):
        current = [i]
        for j, right in enumerate(second, start=1):
            cost = 0 if left == right else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def similarity_score(first: str, second: str) -> float:
    """
    Normalized similarity: 1 - distance / len(longer).

    Two empty strings are identical (1.0).
    """
    longer = max(len(first), len(second))
    if longer == 0:
        return 1.0
    return (longer - levenshtein_distance(first, second)) / longer
