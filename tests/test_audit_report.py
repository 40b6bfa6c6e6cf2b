"""Tests for the report bundle and diff generation."""

from __future__ import annotations

import json
from pathlib import Path

from redactkit.detect.base import DetectedEntity, EntityType
from redactkit.pipeline import run_pipeline
from redactkit.replace.applier import RedactionMode
from redactkit.report import build_report, write_report_bundle
from redactkit.report.audit import build_detection_log, generate_diff_html

TEXT = 'Dear "Ann",\nmail ann@acme.com or call 555-0100.\n'
DETECTED = [
    DetectedEntity("Ann", EntityType.PERSON),
    DetectedEntity("ann@acme.com", EntityType.EMAIL_ADDRESS),
    DetectedEntity("555-0100", EntityType.PHONE_NUMBER),
]


def test_detection_log_rows() -> None:
    result = run_pipeline(TEXT, DETECTED, RedactionMode.MASK)
    rows = build_detection_log(result.source_text, result.entities)
    assert [r.id for r in rows] == ["e0001", "e0002", "e0003"]
    assert [(r.line, r.column) for r in rows] == [(1, 7), (2, 6), (2, 27)]
    assert rows[1].label == "Email Address"
    assert all(TEXT[r.start : r.end] == r.text for r in rows)


def test_build_report_contents() -> None:
    result = run_pipeline(TEXT, DETECTED, RedactionMode.MASK, expected=TEXT)
    report = build_report(result)
    assert report["mode"] == "MASK"
    assert report["dropped_entities"] == 0
    stats = report["stats"]
    assert isinstance(stats, dict)
    assert stats["total_entities"] == 3
    assert stats["breakdown"] == {"PERSON": 1, "EMAIL_ADDRESS": 1, "PHONE_NUMBER": 1}
    assert "evaluation" in report
    json.dumps(report)


def test_diff_html_escapes_and_highlights() -> None:
    result = run_pipeline(TEXT, DETECTED, RedactionMode.MASK)
    html = generate_diff_html(result)
    assert "&quot;" in html
    assert 'class="entity"' in html
    assert 'title="Email Address: Email addresses"' in html
    assert "[EMAIL_ADDRESS]" in html
    assert "Accuracy evaluation" not in html
    assert html == generate_diff_html(result)


def test_write_report_bundle(tmp_path: Path) -> None:
    result = run_pipeline(TEXT, DETECTED, RedactionMode.REDACT, expected="Dear \"\",\n")
    paths = write_report_bundle(tmp_path / "out", result)
    assert set(paths) == {"report.json", "diff.html"}
    data = json.loads(Path(paths["report.json"]).read_text(encoding="utf-8"))
    assert data["mode"] == "REDACT"
    assert len(data["entities"]) == 3
    assert data["evaluation"]["distance"] > 0
    html = Path(paths["diff.html"]).read_text(encoding="utf-8")
    assert "Accuracy evaluation" in html
    assert "only-expected" in html or "only-system" in html
