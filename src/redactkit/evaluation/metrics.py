"""Edit distance and similarity scoring.

:func:`levenshtein` is the classic dynamic-programming edit distance counting
single-character insertions, deletions and substitutions.  Only two rows of
the ``(len(a) + 1) x (len(b) + 1)`` table are kept, which returns the same value
as the full table in linear space.

:func:`similarity` turns the distance into a percentage after collapsing
whitespace, so formatting-only differences (newline style, doubled spaces) do
not lower the score.  An empty reference scores ``0.0``: there is nothing to
score against, and reporting a perfect match would be misleading.
"""

from __future__ import annotations

import re

__all__ = ["levenshtein", "normalize_whitespace", "similarity"]

_WHITESPACE_RUN = re.compile(r"\s+")


def levenshtein(a: str, b: str) -> int:
    """Return the edit distance between ``a`` and ``b``."""

    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i] + [0] * len(b)
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current[j] = min(
                previous[j] + 1,  # deletion
                current[j - 1] + 1,  # insertion
                previous[j - 1] + cost,  # substitution
            )
        previous = current
    return previous[len(b)]


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim both ends."""

    return _WHITESPACE_RUN.sub(" ", text).strip()


def similarity(reference: str, candidate: str) -> float:
    """Return how closely ``candidate`` matches ``reference`` as a percentage.

    Both strings are whitespace-normalised first.  The result lies in
    ``[0.0, 100.0]``; an empty normalised ``reference`` yields ``0.0``.
    """

    a = normalize_whitespace(reference)
    b = normalize_whitespace(candidate)
    if not a:
        return 0.0

    dist = levenshtein(a, b)
    max_len = max(len(a), len(b))
    return max(0.0, (max_len - dist) / max_len * 100)
