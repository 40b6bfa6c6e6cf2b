"""Detect, locate and redact sensitive entities in plain-text documents.

The package wraps an external entity detector (Google Gemini) with a small,
pure text-alignment and redaction engine plus evaluation helpers that compare a
redacted document against a user supplied ground truth.
"""

__version__ = "0.1.0"
