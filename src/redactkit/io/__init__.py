"""Extension based registry for document I/O.

Only plain-text formats are registered: ``.txt``, ``.text`` and ``.md``.  The
registry dispatches on the lower-cased file extension.  Detector output saved
as JSON is loaded with :func:`read_detector_output`, which reuses the same
validation as live detector answers.

``UnsupportedFormatError`` is raised when a path has no registered handler.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable

from ..detect.base import DetectedEntity, parse_detector_output
from ..utils.errors import UnsupportedFormatError
from .plaintext import read_text, write_text

_READERS: dict[str, Callable[..., str]] = {}
_WRITERS: dict[str, Callable[..., None]] = {}


def register_reader(ext: str, func: Callable[..., str]) -> None:
    """Register a reader for files ending with ``ext`` (including the dot)."""

    _READERS[ext.lower()] = func


def register_writer(ext: str, func: Callable[..., None]) -> None:
    """Register a writer for files ending with ``ext`` (including the dot)."""

    _WRITERS[ext.lower()] = func


def get_extension(path: str | os.PathLike[str]) -> str:
    """Return the lower-cased extension of ``path`` or ``""`` when absent."""

    suffix = Path(path).suffix
    return suffix.lower() if suffix else ""


def read_file(path: str | os.PathLike[str], **kwargs: Any) -> str:
    """Read ``path`` using the reader registered for its extension.

    Raises
    ------
    UnsupportedFormatError
        If no reader is registered for the file extension.
    """

    ext = get_extension(path)
    reader = _READERS.get(ext)
    if reader is None:
        raise UnsupportedFormatError(f"Unsupported file extension: '{ext}'") from None
    return reader(path, **kwargs)


def write_file(path: str | os.PathLike[str], text: str, **kwargs: Any) -> None:
    """Write ``text`` to ``path`` using the writer registered for its extension.

    Raises
    ------
    UnsupportedFormatError
        If no writer is registered for the file extension.
    """

    ext = get_extension(path)
    writer = _WRITERS.get(ext)
    if writer is None:
        raise UnsupportedFormatError(f"Unsupported file extension: '{ext}'") from None
    writer(path, text, **kwargs)


def read_detector_output(path: str | os.PathLike[str]) -> list[DetectedEntity]:
    """Load a saved detector answer (a JSON array of ``{text, type}``)."""

    if get_extension(path) != ".json":
        raise UnsupportedFormatError(f"Detector output must be a .json file: '{path}'")
    return parse_detector_output(read_text(path))


for _ext in (".txt", ".text", ".md"):
    register_reader(_ext, read_text)
    register_writer(_ext, write_text)

__all__ = [
    "register_reader",
    "register_writer",
    "get_extension",
    "read_file",
    "write_file",
    "read_detector_output",
]
