"""Redaction applier.

Located entities reference half-open character ranges ``[start, end)`` in the
original text.  Replacements are applied from right to left so spans that are
still pending keep valid offsets: every remaining span lies strictly to the
left of the text already rewritten.  The original string is never modified; a
new string is returned.

``MASK`` replaces each span with its bracketed type tag (``[PERSON]``).
``REDACT`` replaces each span with a single space, so neighbouring words are
not fused, and then collapses runs of plain spaces across the whole document.
Newlines and tabs are left alone so line and paragraph structure survives.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum

from redactkit.detect.base import DetectedEntity, mask_token
from redactkit.utils.logging import get_logger
from redactkit.utils.textspan import sort_spans_for_replacement

__all__ = ["RedactionMode", "apply_redaction", "replacement_for"]

logger = get_logger(__name__)

_SPACE_RUN = re.compile(r" {2,}")


class RedactionMode(Enum):
    """How located spans are rewritten."""

    MASK = "MASK"
    REDACT = "REDACT"

    @classmethod
    def parse(cls, value: "str | RedactionMode") -> "RedactionMode":
        """Return the member for ``value`` (case-insensitive)."""

        if isinstance(value, RedactionMode):
            return value
        try:
            return cls(value.strip().upper())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"unknown redaction mode {value!r}; expected one of {choices}") from None


def replacement_for(entity: DetectedEntity, mode: RedactionMode) -> str:
    """Return the text that replaces ``entity`` under ``mode``."""

    if mode is RedactionMode.MASK:
        return mask_token(entity.type)
    return " "


def apply_redaction(
    text: str,
    entities: Iterable[DetectedEntity],
    mode: RedactionMode,
) -> str:
    """Return ``text`` with every located entity span rewritten.

    Parameters
    ----------
    text:
        The original document the offsets refer to.
    entities:
        Located entities, normally the output of
        :func:`redactkit.locate.locate_entities`.  The caller's sequence is not
        mutated.  Entities without offsets, or whose span does not fit inside
        ``text``, are skipped individually and never abort the batch.
    mode:
        :class:`RedactionMode` selecting placeholder tokens or blanking.
    """

    result = text
    for entity in sort_spans_for_replacement(list(entities)):
        if entity.start is None or entity.end is None:
            logger.debug("skipping unlocated %s entity", entity.type.value)
            continue
        if entity.end > len(text):
            logger.warning(
                "skipping %s entity outside document: [%d, %d) > %d",
                entity.type.value,
                entity.start,
                entity.end,
                len(text),
            )
            continue
        result = result[: entity.start] + replacement_for(entity, mode) + result[entity.end :]

    if mode is RedactionMode.REDACT:
        result = _SPACE_RUN.sub(" ", result)
    return result
