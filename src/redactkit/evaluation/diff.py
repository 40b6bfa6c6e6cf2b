"""Character-level diff classification between ground truth and system output.

:func:`diff_chars` aligns ``expected`` (the ground truth) with ``actual`` (the
system output) and labels each aligned run:

* ``MATCH`` - present in both texts,
* ``ONLY_IN_EXPECTED`` - present only in the ground truth (missed or lost
  content),
* ``ONLY_IN_SYSTEM`` - present only in the system output (spurious or
  over-redacted content).

The two presentation panes are derived from the same segment list by
filtering, so they can never disagree about what matched.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from difflib import SequenceMatcher
from enum import Enum

__all__ = [
    "DiffKind",
    "DiffSegment",
    "diff_chars",
    "expected_view",
    "system_view",
    "render",
]


class DiffKind(Enum):
    """Classification of an aligned diff segment."""

    MATCH = "MATCH"
    ONLY_IN_EXPECTED = "ONLY_IN_EXPECTED"
    ONLY_IN_SYSTEM = "ONLY_IN_SYSTEM"


@dataclass(frozen=True, slots=True)
class DiffSegment:
    """A run of characters sharing one :class:`DiffKind`."""

    value: str
    kind: DiffKind


def _append(segments: list[DiffSegment], value: str, kind: DiffKind) -> None:
    if not value:
        return
    if segments and segments[-1].kind is kind:
        segments[-1] = DiffSegment(segments[-1].value + value, kind)
    else:
        segments.append(DiffSegment(value, kind))


def diff_chars(expected: str, actual: str) -> list[DiffSegment]:
    """Return the ordered segments aligning ``expected`` with ``actual``.

    Within a replaced region the ``ONLY_IN_EXPECTED`` part precedes the
    ``ONLY_IN_SYSTEM`` part.  Adjacent segments of the same kind are merged.
    Two empty inputs produce no segments.

    The alignment comes from :class:`difflib.SequenceMatcher`, which grows the
    longest matching blocks greedily.  It is not guaranteed to be a minimal
    edit script, so heavily repetitive text (``"aaa bbb"`` against
    ``"bbb aaa"``) may split differently from a Myers diff.
    """

    if not expected and not actual:
        return []

    matcher = SequenceMatcher(None, expected, actual, autojunk=False)
    segments: list[DiffSegment] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            _append(segments, expected[i1:i2], DiffKind.MATCH)
            continue
        if tag in ("delete", "replace"):
            _append(segments, expected[i1:i2], DiffKind.ONLY_IN_EXPECTED)
        if tag in ("insert", "replace"):
            _append(segments, actual[j1:j2], DiffKind.ONLY_IN_SYSTEM)
    return segments


def expected_view(segments: Iterable[DiffSegment]) -> list[DiffSegment]:
    """Return the ground-truth pane: ``MATCH`` and ``ONLY_IN_EXPECTED``."""

    return [s for s in segments if s.kind is not DiffKind.ONLY_IN_SYSTEM]


def system_view(segments: Iterable[DiffSegment]) -> list[DiffSegment]:
    """Return the system-output pane: ``MATCH`` and ``ONLY_IN_SYSTEM``."""

    return [s for s in segments if s.kind is not DiffKind.ONLY_IN_EXPECTED]


def render(segments: Sequence[DiffSegment]) -> str:
    """Return the concatenated text of ``segments``."""

    return "".join(s.value for s in segments)
