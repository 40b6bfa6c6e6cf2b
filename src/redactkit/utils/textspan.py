"""Utility functions for working with located entity spans.

The helpers in this module are pure and framework agnostic.  Spans are
represented as half-open intervals ``[start, end)`` where ``start`` is inclusive
and ``end`` is exclusive.  Boundary touching spans therefore do not overlap.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import TYPE_CHECKING

from redactkit.utils.errors import OverlapError

if TYPE_CHECKING:
    from redactkit.detect.base import DetectedEntity


def spans_overlap(a: tuple[int, int], b: tuple[int, int]) -> bool:
    """Return ``True`` if span ``a`` overlaps span ``b``."""

    return not (a[1] <= b[0] or b[1] <= a[0])


def sort_spans_for_replacement(
    entities: list[DetectedEntity], *, reverse: bool = True
) -> list[DetectedEntity]:
    """Return located ``entities`` sorted for safe replacement.

    By default entities are sorted in descending order by ``start``.  Replacing
    spans in this order never shifts the offsets of spans that are still
    pending.  Entities without offsets sort as if they started at ``0``; the
    caller is expected to skip them.  The sort is stable so entities sharing a
    start keep their relative order.
    """

    return sorted(entities, key=lambda e: e.start or 0, reverse=reverse)


def ensure_non_overlapping(entities: list[DetectedEntity]) -> None:
    """Ensure that located ``entities`` do not overlap.

    Entities without offsets are ignored.  Raises :class:`OverlapError` if any
    pair of spans overlaps.
    """

    located = [e for e in entities if e.start is not None and e.end is not None]
    ordered = sorted(located, key=lambda e: e.start or 0)
    for prev, cur in zip(ordered, ordered[1:]):
        if spans_overlap((prev.start or 0, prev.end or 0), (cur.start or 0, cur.end or 0)):
            msg = f"Spans overlap: {prev} and {cur}"
            raise OverlapError(msg)


def build_line_starts(text: str) -> tuple[int, ...]:
    """Return the starting character index for each line in ``text``."""

    starts = [0]
    for idx, char in enumerate(text):
        if char == "\n":
            starts.append(idx + 1)
    return tuple(starts)


def char_to_line_col(index: int, line_starts: tuple[int, ...]) -> tuple[int, int]:
    """Convert a character index to ``(line, col)`` using ``line_starts``.

    Line and column numbers are zero-based.
    """

    if index < 0:
        raise ValueError("index must be non-negative")
    line = bisect_right(line_starts, index) - 1
    if line < 0:
        line = 0
    col = index - line_starts[line]
    return line, col
