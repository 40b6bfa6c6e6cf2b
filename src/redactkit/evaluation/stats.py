"""Derived processing statistics and ground-truth evaluation reports.

Both structures are read-only snapshots recomputed from their inputs; nothing
here is cached or persisted.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from redactkit.detect.base import DetectedEntity, EntityType

from .diff import DiffKind, DiffSegment, diff_chars, expected_view, system_view
from .metrics import levenshtein, similarity

__all__ = ["ProcessingStats", "EvaluationReport", "compute_stats", "evaluate"]


@dataclass(frozen=True, slots=True)
class ProcessingStats:
    """Summary of one detection/redaction cycle."""

    total_entities: int
    levenshtein_distance: int
    similarity_score: float
    breakdown: dict[EntityType, int] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "ProcessingStats":
        """Return the stats reported when nothing was located."""

        return cls(total_entities=0, levenshtein_distance=0, similarity_score=100.0)

    def to_dict(self) -> dict[str, object]:
        return {
            "total_entities": self.total_entities,
            "levenshtein_distance": self.levenshtein_distance,
            "similarity_score": self.similarity_score,
            "breakdown": {t.value: n for t, n in self.breakdown.items()},
        }


def compute_stats(
    text: str, redacted: str, entities: Sequence[DetectedEntity]
) -> ProcessingStats:
    """Return :class:`ProcessingStats` for ``text`` redacted into ``redacted``.

    The breakdown lists entity types in order of first appearance and omits
    types with no entities.
    """

    if not entities:
        return ProcessingStats.empty()
    breakdown = Counter(e.type for e in entities)
    return ProcessingStats(
        total_entities=len(entities),
        levenshtein_distance=levenshtein(text, redacted),
        similarity_score=similarity(text, redacted),
        breakdown=dict(breakdown),
    )


@dataclass(frozen=True, slots=True)
class EvaluationReport:
    """Comparison of the system output against a ground-truth document."""

    similarity: float
    distance: int
    segments: list[DiffSegment]

    @property
    def mismatch(self) -> float:
        return 100.0 - self.similarity

    @property
    def expected_view(self) -> list[DiffSegment]:
        return expected_view(self.segments)

    @property
    def system_view(self) -> list[DiffSegment]:
        return system_view(self.segments)

    def char_counts(self) -> dict[str, int]:
        """Return the number of characters per :class:`DiffKind`."""

        counts = {kind.value: 0 for kind in DiffKind}
        for seg in self.segments:
            counts[seg.kind.value] += len(seg.value)
        return counts

    def to_dict(self) -> dict[str, object]:
        return {
            "similarity": self.similarity,
            "mismatch": self.mismatch,
            "distance": self.distance,
            "char_counts": self.char_counts(),
        }


def evaluate(expected: str, actual: str) -> EvaluationReport:
    """Compare the ground truth ``expected`` with the system output ``actual``.

    The distance is computed on the raw strings while the similarity score is
    whitespace-normalised, mirroring :func:`~redactkit.evaluation.metrics.similarity`.
    """

    return EvaluationReport(
        similarity=similarity(expected, actual),
        distance=levenshtein(expected, actual),
        segments=diff_chars(expected, actual),
    )
