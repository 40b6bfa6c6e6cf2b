"""Detection to redaction pipeline.

Every derived artifact (located entities, redacted text, statistics and the
optional ground-truth evaluation) is a pure function of the source text, the
detector output, the redaction mode and the expected text.  :func:`run_pipeline`
recomputes all of them from scratch on each call instead of patching earlier
results, so a changed input can never leave stale state behind.

The external detector is the only collaborator that performs I/O.  It is
called exclusively through :func:`detect_entities`, which turns any failure
into a single :class:`~redactkit.utils.errors.DetectorError`; no partial entity
list ever reaches the locator.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from redactkit.detect.base import DetectedEntity, EntityDetector
from redactkit.evaluation.stats import EvaluationReport, ProcessingStats, compute_stats, evaluate
from redactkit.locate.locator import locate_entities
from redactkit.replace.applier import RedactionMode, apply_redaction
from redactkit.utils.errors import DetectorError
from redactkit.utils.logging import get_logger

__all__ = ["PipelineResult", "detect_entities", "run_pipeline", "detect_and_redact"]

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Snapshot of one detection/redaction cycle."""

    source_text: str
    mode: RedactionMode
    detected: list[DetectedEntity]
    entities: list[DetectedEntity]
    redacted_text: str
    stats: ProcessingStats
    evaluation: EvaluationReport | None = None

    @property
    def dropped_count(self) -> int:
        """Number of detector entities that could not be located."""

        return len(self.detected) - len(self.entities)


def detect_entities(text: str, detector: EntityDetector) -> list[DetectedEntity]:
    """Call ``detector`` on ``text`` and return its unlocated entities.

    Blank documents return an empty list without calling the detector.

    Raises
    ------
    DetectorError
        For any failure inside the detector, including unexpected exception
        types, so callers only have one failure signal to handle.
    """

    if not text.strip():
        return []
    try:
        return list(detector.detect(text))
    except DetectorError:
        raise
    except Exception as exc:
        logger.error("detector %s failed", detector.name(), exc_info=True)
        raise DetectorError(f"detector {detector.name()} failed: {exc}") from exc


def run_pipeline(
    text: str,
    detector_output: Sequence[DetectedEntity],
    mode: RedactionMode,
    expected: str | None = None,
) -> PipelineResult:
    """Locate, redact and score ``text`` for the given detector output.

    When no entity can be located the redacted text equals ``text`` and the
    statistics are :meth:`ProcessingStats.empty`.  ``expected`` enables the
    ground-truth evaluation; ``None`` skips it.
    """

    located = locate_entities(text, detector_output)
    redacted = apply_redaction(text, located, mode) if located else text
    stats = compute_stats(text, redacted, located)
    evaluation = evaluate(expected, redacted) if expected is not None else None
    logger.debug(
        "pipeline located %d/%d entities in %s mode",
        len(located),
        len(detector_output),
        mode.value,
    )
    return PipelineResult(
        source_text=text,
        mode=mode,
        detected=list(detector_output),
        entities=located,
        redacted_text=redacted,
        stats=stats,
        evaluation=evaluation,
    )


def detect_and_redact(
    text: str,
    detector: EntityDetector,
    mode: RedactionMode,
    expected: str | None = None,
) -> PipelineResult:
    """Run the detector and then :func:`run_pipeline` on its output."""

    return run_pipeline(text, detect_entities(text, detector), mode, expected)
