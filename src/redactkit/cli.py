"""Typer-based command line interface for redactkit.

``run`` executes the whole workflow on a plain-text document: read the input,
obtain entities from the detector (or from a saved ``--entities`` JSON file),
locate them, rewrite the document in the selected mode, optionally score the
result against a ground truth and emit a report bundle.  ``detect`` writes the
detection log only and ``evaluate`` compares two existing documents.  The Gemini
SDK is imported on demand so offline invocations stay lightweight.

Exit codes
----------
0 success
3 I/O error (missing file, unsupported extension, filesystem issues)
4 configuration error (invalid YAML, missing API key)
5 pipeline error (unexpected exception during locate/redact/evaluate)
7 detector failure (request failed or malformed detector output)
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError

from .config import ConfigModel, ensure_api_key, load_config
from .detect.base import DetectedEntity, EntityDetector
from .evaluation.stats import evaluate as evaluate_texts
from .io import read_detector_output, read_file, write_file
from .pipeline import PipelineResult, detect_entities, run_pipeline
from .replace.applier import RedactionMode
from .report import write_report_bundle
from .report.audit import build_detection_log
from .utils.errors import ConfigurationError, DetectorError, UnsupportedFormatError
from .utils.logging import configure_logging

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")

app = typer.Typer(
    name="redactkit",
    help=(
        "Detect, mask or redact sensitive entities in text documents. "
        "Use 'redactkit run' to execute the pipeline."
    ),
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> None:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _load_config_or_exit(config_path: Path | None) -> ConfigModel:
    try:
        return load_config(config_path)
    except (ValidationError, yaml.YAMLError, OSError) as exc:
        _safe_exit(4, str(exc).splitlines()[0])
    raise AssertionError("unreachable")  # pragma: no cover


def _read_or_exit(path: Path, encoding: str = "utf-8-sig") -> str:
    try:
        return read_file(path, encoding=encoding)
    except (FileNotFoundError, UnsupportedFormatError, UnicodeDecodeError, OSError) as exc:
        _safe_exit(3, str(exc))
    raise AssertionError("unreachable")  # pragma: no cover


def _build_detector(cfg: ConfigModel) -> EntityDetector:
    """Return the detector configured in ``cfg``.

    Raises :class:`ConfigurationError` when the API key is missing.
    """

    from .detect.gemini import GeminiDetector

    ensure_api_key(cfg, strict=True)
    return GeminiDetector(cfg.detector)


def _obtain_entities(
    text: str, cfg: ConfigModel, entities_path: Path | None
) -> list[DetectedEntity]:
    """Return detector output from ``entities_path`` or the live detector."""

    if entities_path is not None:
        try:
            return read_detector_output(entities_path)
        except (FileNotFoundError, UnsupportedFormatError, UnicodeDecodeError, OSError) as exc:
            _safe_exit(3, str(exc))
        except DetectorError as exc:
            _safe_exit(7, str(exc))

    try:
        detector = _build_detector(cfg)
    except ConfigurationError as exc:
        _safe_exit(4, str(exc))
    try:
        return detect_entities(text, detector)
    except DetectorError as exc:
        _safe_exit(7, str(exc))
    raise AssertionError("unreachable")  # pragma: no cover


def _parse_mode(value: str | None, cfg: ConfigModel) -> RedactionMode:
    try:
        return RedactionMode.parse(value if value is not None else cfg.redaction.mode)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--mode") from exc


@app.callback()
def main() -> None:
    """Entry point for the redactkit command group."""
    pass


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def run(  # noqa: PLR0913
    in_path: Path = typer.Option(  # noqa: B008
        ..., "--in", "--input", help="Input document (.txt or .md)"
    ),
    out_path: Path = typer.Option(..., "--out", help="Output document (.txt or .md)"),  # noqa: B008
    mode: Optional[str] = typer.Option(  # noqa: B008
        None, "--mode", help="MASK replaces with [TYPE] tags, REDACT blanks the text"
    ),
    entities_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--entities", help="Saved detector output (.json) used instead of Gemini"
    ),
    expected_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--expected", help="Ground-truth document to evaluate the output against"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    report_dir: Optional[Path] = typer.Option(  # noqa: B008
        None, "--report", help="Directory to write report.json and diff.html"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Redact ``in_path`` and write the result to ``out_path``."""

    cfg = _load_config_or_exit(config_path)
    configure_logging(cfg.logging.level, verbose=verbose)
    redaction_mode = _parse_mode(mode, cfg)

    text = _read_or_exit(in_path)
    expected = _read_or_exit(expected_path) if expected_path is not None else None
    if verbose:
        typer.echo(f"Read {len(text)} chars", err=True)

    detected = _obtain_entities(text, cfg, entities_path)
    if verbose:
        typer.echo(f"Detector returned {len(detected)} entities", err=True)

    try:
        result = run_pipeline(text, detected, redaction_mode, expected)
    except Exception as exc:  # pragma: no cover - unexpected
        msg = str(exc)
        if verbose:
            msg = f"{type(exc).__name__}: {msg}"
        _safe_exit(5, msg)

    try:
        write_file(out_path, result.redacted_text)
    except (UnsupportedFormatError, OSError) as exc:
        _safe_exit(3, str(exc))

    if report_dir is not None:
        try:
            write_report_bundle(report_dir, result)
        except OSError as exc:
            _safe_exit(3, str(exc))
        if verbose:
            typer.echo(f"Report written to {report_dir}", err=True)

    _echo_summary(result)


def _echo_summary(result: PipelineResult) -> None:
    stats = result.stats
    typer.echo(
        f"{result.mode.value}: {stats.total_entities} entities located "
        f"({result.dropped_count} dropped), distance {stats.levenshtein_distance}, "
        f"similarity {stats.similarity_score:.1f}%"
    )
    if result.evaluation is not None:
        typer.echo(f"Accuracy vs expected: {result.evaluation.similarity:.1f}%")


@app.command()
def detect(
    in_path: Path = typer.Option(  # noqa: B008
        ..., "--in", "--input", help="Input document (.txt or .md)"
    ),
    out_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--out", help="Write the detection log JSON here instead of stdout"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Run the detector and print located entities as JSON."""

    from .locate.locator import locate_entities

    cfg = _load_config_or_exit(config_path)
    configure_logging(cfg.logging.level, verbose=verbose)

    text = _read_or_exit(in_path)
    detected = _obtain_entities(text, cfg, None)
    located = locate_entities(text, detected)
    rows = [
        {"type": r.type, "text": r.text, "start": r.start, "end": r.end, "line": r.line}
        for r in build_detection_log(text, located)
    ]
    payload = json.dumps(rows, ensure_ascii=False, indent=2)

    if out_path is None:
        typer.echo(payload)
        return
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(payload + "\n", encoding="utf-8")
    except OSError as exc:
        _safe_exit(3, str(exc))


@app.command()
def evaluate(
    expected_path: Path = typer.Option(  # noqa: B008
        ..., "--expected", help="Ground-truth document"
    ),
    actual_path: Path = typer.Option(  # noqa: B008
        ..., "--actual", help="System output to score"
    ),
    as_json: bool = typer.Option(  # noqa: B008
        False, "--json", help="Print the evaluation summary as JSON"
    ),
) -> None:
    """Score ``actual_path`` against ``expected_path``."""

    expected = _read_or_exit(expected_path)
    actual = _read_or_exit(actual_path)
    report = evaluate_texts(expected, actual)

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
        return
    counts = report.char_counts()
    typer.echo(f"Similarity: {report.similarity:.1f}%")
    typer.echo(f"Mismatch: {report.mismatch:.1f}%")
    typer.echo(f"Levenshtein distance: {report.distance}")
    typer.echo(
        f"Only in expected: {counts['ONLY_IN_EXPECTED']} chars, "
        f"only in system: {counts['ONLY_IN_SYSTEM']} chars"
    )


if __name__ == "__main__":  # pragma: no cover
    app()
