"""Cursor-based entity locator.

The detector reports entity *text* without positions.  Offsets are recovered by
scanning the original document with a single forward-moving cursor: each
entity binds to the first occurrence of its text at or after the cursor, and
the cursor then jumps to the end of that occurrence.  Repeated values (the same
email twice, say) therefore consume successive occurrences in order instead of
all binding to the first one.

Entities whose text does not occur in the unsearched remainder are dropped.
This is best-effort behaviour rather than an error: a detector that reports
entities out of order, or paraphrases them, simply loses those entries.  The
search never moves behind the cursor.
"""

from __future__ import annotations

from collections.abc import Iterable

from redactkit.detect.base import DetectedEntity
from redactkit.utils.logging import get_logger

__all__ = ["locate_entities"]

logger = get_logger(__name__)


def locate_entities(text: str, entities: Iterable[DetectedEntity]) -> list[DetectedEntity]:
    """Return located copies of ``entities`` in non-decreasing ``start`` order.

    Parameters
    ----------
    text:
        The original document.  It is only read.
    entities:
        Detector output in detector order.  Offsets already present on the
        input are ignored and recomputed.

    Returns
    -------
    list[DetectedEntity]
        One entry per entity that could be found past the cursor.  Every entry
        satisfies ``start < end <= len(text)`` and no two entries overlap.
    """

    cursor = 0
    located: list[DetectedEntity] = []
    for entity in entities:
        if not entity.text:
            logger.debug("dropping %s entity with empty text", entity.type.value)
            continue
        start = text.find(entity.text, cursor)
        if start == -1:
            logger.debug(
                "dropping %s entity not found after offset %d", entity.type.value, cursor
            )
            continue
        located.append(entity.located_at(start))
        cursor = start + len(entity.text)
    return located
