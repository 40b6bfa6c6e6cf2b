"""Plain-text document ingestion and output.

Documents are treated as one opaque string: no structure is parsed and no
content is normalised.  Reading uses ``newline=""`` so ``\\r\\n`` and ``\\r``
survive untouched (offsets computed by the locator must refer to the exact
characters on disk) and defaults to ``utf-8-sig`` so a leading BOM is dropped.
"""

from __future__ import annotations

import os
from pathlib import Path

__all__ = ["read_text", "write_text"]

PathLikeStr = os.PathLike[str]


def read_text(
    path: str | PathLikeStr,
    *,
    encoding: str = "utf-8-sig",
    errors: str = "strict",
) -> str:
    """Return the contents of ``path`` without newline translation.

    ``FileNotFoundError`` and decoding errors propagate to the caller.
    """

    with open(path, "r", encoding=encoding, errors=errors, newline="") as f:
        return f.read()


def write_text(
    path: str | PathLikeStr,
    text: str,
    *,
    encoding: str = "utf-8",
    newline: str | None = "",
) -> None:
    """Write ``text`` to ``path`` exactly as provided.

    Parent directories are created when missing.  The default ``newline=""``
    emits newline characters verbatim.
    """

    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding=encoding, newline=newline) as f:
        f.write(text)
