"""
Matching — "Did you mean" suggestions for mistyped tokens

A candidate is suggested when any rule holds (case-insensitive):
  1. Substring containment in either direction ("conf" / "config")
  2. Positional character matches over the longer length > 0.5
  3. Normalized edit similarity >= 0.6 (single-edit typos: "delte")

Rules 1 and 2 are not edit distance; rule 3 covers transpositions
and dropped letters they miss.
"""

from typing import Iterable, List

from rapidfuzz.distance import Levenshtein

MAX_SUGGESTIONS = 3
POSITIONAL_THRESHOLD = 0.5
EDIT_SIMILARITY_THRESHOLD = 0.6


def positional_similarity(a: str, b: str) -> float:
    """Fraction of aligned positions holding the same character."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 0.0
    matches = sum(1 for x, y in zip(a, b) if x == y)
    return matches / longest


def is_similar(token: str, candidate: str) -> bool:
    """True if candidate is a plausible correction of token."""
    token = token.lower()
    candidate = candidate.lower()
    if not token or not candidate:
        return False

    if token in candidate or candidate in token:
        return True

    if positional_similarity(token, candidate) > POSITIONAL_THRESHOLD:
        return True

    return Levenshtein.normalized_similarity(token, candidate) >= EDIT_SIMILARITY_THRESHOLD


def suggest(token: str, candidates: Iterable[str], limit: int = MAX_SUGGESTIONS) -> List[str]:
    """Up to `limit` candidates similar to token, in candidate order."""
    return [c for c in candidates if is_similar(token, c)][:limit]


def format_suggestions(suggestions: List[str]) -> str:
    """Suffix appended to an error message, empty when nothing matched."""
    if not suggestions:
        return ""
    return f" Did you mean: {', '.join(suggestions)}?"
