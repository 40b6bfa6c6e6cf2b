"""Report artifacts summarising a redaction run."""

from .audit import build_report, write_report_bundle

__all__ = ["build_report", "write_report_bundle"]
