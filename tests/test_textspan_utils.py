import pytest

from redactkit.detect.base import DetectedEntity, EntityType
from redactkit.utils.errors import OverlapError
from redactkit.utils.textspan import (
    build_line_starts,
    char_to_line_col,
    ensure_non_overlapping,
    sort_spans_for_replacement,
    spans_overlap,
)


def test_line_starts_and_char_to_line_col() -> None:
    text = "John\nDoe\n\n"
    line_starts = build_line_starts(text)
    assert line_starts == (0, 5, 9, 10)
    assert char_to_line_col(0, line_starts) == (0, 0)
    assert char_to_line_col(6, line_starts) == (1, 1)
    assert char_to_line_col(9, line_starts) == (2, 0)
    with pytest.raises(ValueError):
        char_to_line_col(-1, line_starts)


def test_spans_overlap_truth_table() -> None:
    assert spans_overlap((0, 2), (1, 3)) is True
    assert spans_overlap((0, 2), (2, 4)) is False
    assert spans_overlap((2, 4), (0, 2)) is False


def test_sort_spans_for_replacement_ordering() -> None:
    entities = [
        DetectedEntity("abc", EntityType.OTHER, 0, 3),
        DetectedEntity("de", EntityType.OTHER, 5, 7),
        DetectedEntity("fgh", EntityType.OTHER, 9, 12),
    ]
    assert [e.start for e in sort_spans_for_replacement(entities)] == [9, 5, 0]
    assert [e.start for e in sort_spans_for_replacement(entities, reverse=False)] == [0, 5, 9]
    assert [e.start for e in entities] == [0, 5, 9]


def test_ensure_non_overlapping() -> None:
    touching = [
        DetectedEntity("abc", EntityType.OTHER, 0, 3),
        DetectedEntity("de", EntityType.OTHER, 3, 5),
        DetectedEntity("unlocated", EntityType.OTHER),
    ]
    ensure_non_overlapping(touching)

    overlapping = [
        DetectedEntity("abc", EntityType.OTHER, 0, 3),
        DetectedEntity("cde", EntityType.OTHER, 2, 5),
    ]
    with pytest.raises(OverlapError):
        ensure_non_overlapping(overlapping)
