from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from typer.testing import CliRunner

from redactkit import cli
from redactkit.cli import app
from redactkit.detect.base import DetectedEntity, EntityType

TEXT = "Contact John Smith at john@example.com today.\n"
ENTITIES = [
    {"text": "John Smith", "type": "PERSON"},
    {"text": "john@example.com", "type": "EMAIL_ADDRESS"},
    {"text": "Jane Roe", "type": "PERSON"},
]


def _setup(tmp_path: Path) -> tuple[Path, Path]:
    in_txt = tmp_path / "in.txt"
    in_txt.write_text(TEXT, encoding="utf-8")
    entities = tmp_path / "entities.json"
    entities.write_text(json.dumps(ENTITIES), encoding="utf-8")
    return in_txt, entities


def test_cli_run_mask(tmp_path: Path) -> None:
    in_txt, entities = _setup(tmp_path)
    out_txt = tmp_path / "out.txt"
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["run", "--in", str(in_txt), "--out", str(out_txt), "--entities", str(entities)],
    )
    assert result.exit_code == 0, result.output
    assert out_txt.read_text(encoding="utf-8") == "Contact [PERSON] at [EMAIL_ADDRESS] today.\n"
    assert "MASK: 2 entities located (1 dropped)" in result.stdout


def test_cli_run_redact_with_report(tmp_path: Path) -> None:
    in_txt, entities = _setup(tmp_path)
    out_txt = tmp_path / "out.txt"
    expected = tmp_path / "expected.txt"
    expected.write_text("Contact at today.\n", encoding="utf-8")
    report_dir = tmp_path / "report"
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "run",
            "--in",
            str(in_txt),
            "--out",
            str(out_txt),
            "--mode",
            "redact",
            "--entities",
            str(entities),
            "--expected",
            str(expected),
            "--report",
            str(report_dir),
        ],
    )
    assert result.exit_code == 0, result.output
    assert out_txt.read_text(encoding="utf-8") == "Contact at today.\n"
    assert "Accuracy vs expected: 100.0%" in result.stdout

    data = json.loads((report_dir / "report.json").read_text(encoding="utf-8"))
    assert data["mode"] == "REDACT"
    assert data["dropped_entities"] == 1
    assert [e["type"] for e in data["entities"]] == ["PERSON", "EMAIL_ADDRESS"]
    assert data["stats"]["breakdown"] == {"PERSON": 1, "EMAIL_ADDRESS": 1}
    assert data["evaluation"]["similarity"] == 100.0
    assert (report_dir / "diff.html").exists()


def test_cli_run_mode_from_config(tmp_path: Path) -> None:
    in_txt, entities = _setup(tmp_path)
    cfg = tmp_path / "cfg.yml"
    cfg.write_text("redaction:\n  mode: REDACT\n", encoding="utf-8")
    out_txt = tmp_path / "out.txt"
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "run",
            "--in",
            str(in_txt),
            "--out",
            str(out_txt),
            "--entities",
            str(entities),
            "--config",
            str(cfg),
        ],
    )
    assert result.exit_code == 0, result.output
    assert "[PERSON]" not in out_txt.read_text(encoding="utf-8")


def test_cli_run_with_live_detector(tmp_path: Path, monkeypatch: Any) -> None:
    class StaticDetector:
        def name(self) -> str:
            return "static"

        def detect(self, text: str) -> list[DetectedEntity]:
            return [DetectedEntity("John Smith", EntityType.PERSON)]

    monkeypatch.setattr(cli, "_build_detector", lambda cfg: StaticDetector())
    in_txt, _ = _setup(tmp_path)
    out_txt = tmp_path / "out.txt"
    runner = CliRunner()
    result = runner.invoke(app, ["run", "--in", str(in_txt), "--out", str(out_txt)])
    assert result.exit_code == 0, result.output
    assert out_txt.read_text(encoding="utf-8") == "Contact [PERSON] at john@example.com today.\n"


def test_cli_detect(tmp_path: Path, monkeypatch: Any) -> None:
    class StaticDetector:
        def name(self) -> str:
            return "static"

        def detect(self, text: str) -> list[DetectedEntity]:
            return [
                DetectedEntity("john@example.com", EntityType.EMAIL_ADDRESS),
                DetectedEntity("Nobody", EntityType.PERSON),
            ]

    monkeypatch.setattr(cli, "_build_detector", lambda cfg: StaticDetector())
    in_txt, _ = _setup(tmp_path)
    runner = CliRunner()
    result = runner.invoke(app, ["detect", "--in", str(in_txt)])
    assert result.exit_code == 0, result.output
    rows = json.loads(result.stdout)
    assert rows == [
        {"type": "EMAIL_ADDRESS", "text": "john@example.com", "start": 22, "end": 38, "line": 1}
    ]


def test_cli_evaluate(tmp_path: Path) -> None:
    expected = tmp_path / "expected.txt"
    actual = tmp_path / "actual.txt"
    expected.write_text("Hi [PERSON].", encoding="utf-8")
    actual.write_text("Hi John.", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(app, ["evaluate", "--expected", str(expected), "--actual", str(actual)])
    assert result.exit_code == 0, result.output
    assert "Similarity:" in result.stdout
    assert "Levenshtein distance:" in result.stdout

    result = runner.invoke(
        app, ["evaluate", "--expected", str(expected), "--actual", str(expected), "--json"]
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["similarity"] == 100.0
    assert data["distance"] == 0
    assert data["char_counts"]["ONLY_IN_SYSTEM"] == 0
