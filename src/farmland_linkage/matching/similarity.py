from __future__ import annotations

from rapidfuzz.distance import Levenshtein

from farmland_linkage.core.exceptions import require_text
from farmland_linkage.normalization.text import normalize_text


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance (unit cost insert/delete/substitute)."""
    return Levenshtein.distance(require_text(a, "a"), require_text(b, "b"))


def calculate_similarity(a: str, b: str) -> float:
    """
    Normalized Levenshtein similarity in [0, 1]:

        (max(len(a), len(b)) - edit_distance(a, b)) / max(len(a), len(b))

    Two empty strings are identical (1.0).
    """
    longest = max(len(require_text(a, "a")), len(require_text(b, "b")))
    if longest == 0:
        return 1.0
    return (longest - edit_distance(a, b)) / longest


def normalized_similarity(a: str, b: str) -> float:
    """Similarity of the two strings after orthographic normalization."""
    return calculate_similarity(normalize_text(a), normalize_text(b))
