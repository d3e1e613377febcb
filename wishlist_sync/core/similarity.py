"""Edit-distance based fuzzy equality of game titles.

Similarity is symmetric but not transitive: "a" ~ "b" and "b" ~ "c" does not
imply "a" ~ "c". Callers must not treat it as an equivalence relation.
"""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein

from .normalization import normalize_name

DEFAULT_THRESHOLD = 0.2


def edit_distance(s1: str, s2: str) -> int:
    """Unit-cost Levenshtein distance between two strings (no normalization)."""
    return Levenshtein.distance(s1, s2)


def similarity_ratio(s1: str, s2: str) -> float:
    """Similarity ratio 0.0 - 1.0 of two normalized titles.

    Two names that both normalize to ``""`` have a ratio of 1.0.
    """
    a = normalize_name(s1)
    b = normalize_name(s2)
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1.0 - (edit_distance(a, b) / max_len)


def within_threshold(normalized_a: str, normalized_b: str,
                     threshold: float = DEFAULT_THRESHOLD) -> bool:
    """``is_similar`` for names that are already normalized.

    Negative thresholds are clamped to 0 (exact normalized match).
    """
    limit = max(len(normalized_a), len(normalized_b)) * max(threshold, 0.0)
    return edit_distance(normalized_a, normalized_b) <= limit


def is_similar(name_a: str, name_b: str, threshold: float = DEFAULT_THRESHOLD) -> bool:
    """Check whether two titles are within ``threshold`` of each other.

    The allowed distance scales with the longer normalized name, so short
    titles get little tolerance: one edit on a 3-character title exceeds a
    20% threshold while the same edit on a 30-character title does not.

    Args:
        name_a: First title (raw)
        name_b: Second title (raw)
        threshold: Fraction of the longer normalized length allowed as edits

    Returns:
        True when ``distance <= max_len * threshold``
    """
    return within_threshold(normalize_name(name_a), normalize_name(name_b), threshold)
