"""Report bundle for a redaction run.

Two artifacts are written next to each other:

``report.json``
    The detection log (one row per located entity with its type, display
    label, text, offsets and line/column), the processing statistics with the
    per-type breakdown, and an evaluation summary when a ground truth was
    supplied.  Rows contain the *original* entity text, so the file must be
    kept local and handled like the source document.

``diff.html``
    A static page with the source and redacted documents side by side, entity
    spans highlighted with their type badge.  With a ground truth the page also
    shows the expected and system panes.  Both panes are filtered from the same
    diff segment list so their highlighting is always consistent.
"""

from __future__ import annotations

import html
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from redactkit.detect.base import DetectedEntity
from redactkit.evaluation.diff import DiffKind, DiffSegment
from redactkit.pipeline import PipelineResult
from redactkit.utils.textspan import build_line_starts, char_to_line_col

__all__ = [
    "DetectionLogRow",
    "build_detection_log",
    "build_report",
    "generate_diff_html",
    "write_report_bundle",
]


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DetectionLogRow:
    """One located entity as shown in the detection log."""

    id: str
    type: str
    label: str
    text: str
    start: int
    end: int
    line: int
    column: int


# ---------------------------------------------------------------------------
# Assembly helpers
# ---------------------------------------------------------------------------


def build_detection_log(text: str, entities: list[DetectedEntity]) -> list[DetectionLogRow]:
    """Return detection log rows for located ``entities`` of ``text``.

    Line and column numbers are one-based for display.
    """

    line_starts = build_line_starts(text)
    rows: list[DetectionLogRow] = []
    for idx, e in enumerate(entities, start=1):
        if e.start is None or e.end is None:
            continue
        line, col = char_to_line_col(e.start, line_starts)
        rows.append(
            DetectionLogRow(
                id=f"e{idx:04d}",
                type=e.type.value,
                label=e.info.display_label,
                text=e.text,
                start=e.start,
                end=e.end,
                line=line + 1,
                column=col + 1,
            )
        )
    return rows


def build_report(result: PipelineResult) -> dict[str, object]:
    """Return the JSON-serialisable content of ``report.json``."""

    report: dict[str, object] = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "mode": result.mode.value,
        "entities": [
            {
                "id": row.id,
                "type": row.type,
                "label": row.label,
                "text": row.text,
                "start": row.start,
                "end": row.end,
                "line": row.line,
                "column": row.column,
            }
            for row in build_detection_log(result.source_text, result.entities)
        ],
        "dropped_entities": result.dropped_count,
        "stats": result.stats.to_dict(),
    }
    if result.evaluation is not None:
        report["evaluation"] = result.evaluation.to_dict()
    return report


# ---------------------------------------------------------------------------
# HTML diff generator
# ---------------------------------------------------------------------------

_BADGE_COLORS = {
    "blue": "#bfdbfe",
    "emerald": "#a7f3d0",
    "orange": "#fed7aa",
    "rose": "#fecdd3",
    "violet": "#ddd6fe",
    "cyan": "#a5f3fc",
    "slate": "#e2e8f0",
}

_SEGMENT_CLASSES = {
    DiffKind.MATCH: "match",
    DiffKind.ONLY_IN_EXPECTED: "only-expected",
    DiffKind.ONLY_IN_SYSTEM: "only-system",
}


def _entity_title(entity: DetectedEntity) -> str:
    return f"{entity.info.display_label}: {entity.info.description}"


def _highlight_source(text: str, entities: list[DetectedEntity]) -> str:
    pieces: list[str] = []
    last = 0
    for e in entities:
        if e.start is None or e.end is None or e.start < last:
            continue
        pieces.append(html.escape(text[last : e.start]))
        color = _BADGE_COLORS.get(e.info.badge, _BADGE_COLORS["slate"])
        pieces.append(
            f'<span class="entity" title="{html.escape(_entity_title(e))}" '
            f'style="background:{color}">{html.escape(text[e.start : e.end])}</span>'
        )
        last = e.end
    pieces.append(html.escape(text[last:]))
    return "".join(pieces)


def _render_segments(segments: list[DiffSegment]) -> str:
    return "".join(
        f'<span class="{_SEGMENT_CLASSES[s.kind]}">{html.escape(s.value)}</span>'
        for s in segments
    )


def generate_diff_html(result: PipelineResult) -> str:
    """Return a static HTML page visualising ``result``."""

    source_html = _highlight_source(result.source_text, result.entities)
    redacted_html = html.escape(result.redacted_text)

    stats = result.stats
    breakdown_rows = "".join(
        f"<tr><td>{html.escape(t.value)}</td><td>{n}</td></tr>"
        for t, n in stats.breakdown.items()
    )

    evaluation_html = ""
    if result.evaluation is not None:
        ev = result.evaluation
        evaluation_html = (
            f"<h2>Accuracy evaluation: {ev.similarity:.1f}%</h2>"
            "<div class='container'>"
            f"<div class='pane'><h3>Expected output</h3>{_render_segments(ev.expected_view)}</div>"
            f"<div class='pane'><h3>System output</h3>{_render_segments(ev.system_view)}</div>"
            "</div>"
        )

    return (
        "<!DOCTYPE html>\n"
        "<html><head><meta charset='utf-8'><title>Redaction report</title>"
        "<style>"
        "body{font-family:sans-serif;}"
        "table{border-collapse:collapse;margin-bottom:1em;}"
        "th,td{border:1px solid #ccc;padding:4px;}"
        "div.container{display:flex;gap:2%;}"
        "div.pane{width:50%;white-space:pre-wrap;font-family:monospace;}"
        "span.only-expected{background:#a7f3d0;font-weight:bold;}"
        "span.only-system{background:#fecaca;font-weight:bold;}"
        "span.match{opacity:0.7;}"
        "</style></head><body>"
        f"<p>Mode: {result.mode.value}. Entities: {stats.total_entities}. "
        f"Levenshtein distance: {stats.levenshtein_distance}. "
        f"Context preservation: {stats.similarity_score:.1f}%.</p>"
        "<table class='breakdown'><thead><tr><th>Type</th><th>Count</th></tr></thead>"
        f"<tbody>{breakdown_rows}</tbody></table>"
        "<div class='container'>"
        f"<div class='pane'><h3>Source</h3>{source_html}</div>"
        f"<div class='pane'><h3>Redacted</h3>{redacted_html}</div>"
        "</div>"
        f"{evaluation_html}"
        "</body></html>"
    )


# ---------------------------------------------------------------------------
# Report bundle writer
# ---------------------------------------------------------------------------


def write_report_bundle(report_dir: str | Path, result: PipelineResult) -> dict[str, str]:
    """Write ``report.json`` and ``diff.html`` into ``report_dir``.

    Returns a mapping of artifact name to written path.
    """

    report_path = Path(report_dir)
    report_path.mkdir(parents=True, exist_ok=True)

    written: dict[str, str] = {}

    json_path = report_path / "report.json"
    with json_path.open("w", encoding="utf-8") as f:
        json.dump(build_report(result), f, ensure_ascii=False, indent=2)
    written["report.json"] = str(json_path)

    html_path = report_path / "diff.html"
    html_path.write_text(generate_diff_html(result), encoding="utf-8")
    written["diff.html"] = str(html_path)

    return written
