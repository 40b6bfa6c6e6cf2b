"""Resolve detector entity text to character offsets in the source document."""

from .locator import locate_entities

__all__ = ["locate_entities"]
