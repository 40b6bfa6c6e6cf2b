"""Rewrite a document by masking or blanking located entity spans."""

from .applier import RedactionMode, apply_redaction, replacement_for

__all__ = ["RedactionMode", "apply_redaction", "replacement_for"]
