"""Accuracy metrics comparing a redacted document with a ground truth."""

from .diff import DiffKind, DiffSegment, diff_chars, expected_view, render, system_view
from .metrics import levenshtein, normalize_whitespace, similarity
from .stats import EvaluationReport, ProcessingStats, compute_stats, evaluate

__all__ = [
    "DiffKind",
    "DiffSegment",
    "EvaluationReport",
    "ProcessingStats",
    "compute_stats",
    "diff_chars",
    "evaluate",
    "expected_view",
    "levenshtein",
    "normalize_whitespace",
    "render",
    "similarity",
    "system_view",
]
