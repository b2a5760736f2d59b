"""Finding project source files and splitting them into overlapping chunks."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Iterable

log = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def find_project_files(root_dir: str | os.PathLike[str], extensions: Iterable[str]) -> list[str]:
    """Return files under ``root_dir`` matching each wildcard pattern in turn.

    Patterns such as ``"*.h"`` are searched one after another, so the result
    lists all matches of the first pattern before those of the second.
    """
    root = os.fspath(root_dir)
    patterns = tuple(extensions)
    if not root or not patterns:
        return []

    base = Path(os.path.normpath(root))
    log.debug("searching %s", base)
    if not base.is_dir():
        return []

    found: list[str] = []
    for pattern in patterns:
        matches = sorted(str(path) for path in base.rglob(pattern) if path.is_file())
        if matches:
            log.debug("found %d files matching %r in %s", len(matches), pattern, base)
            found.extend(matches)
    log.debug("total files found: %d", len(found))
    return found


def chunk_file_content(content: str, chunk_size_lines: int, overlap_lines: int) -> list[str]:
    """Split text into chunks of lines, consecutive chunks sharing ``overlap_lines``.

    Empty lines are dropped first. When the overlap equals the chunk size the
    window advances by a single line.
    """
    lines = [line for line in _LINE_BREAK.split(content) if line]
    if not lines:
        return []

    step = chunk_size_lines - overlap_lines
    if step < 0:
        raise ValueError("overlap_lines must not exceed chunk_size_lines")
    if step == 0:
        step = 1

    chunks = []
    for start in range(0, len(lines), step):
        end = min(start + chunk_size_lines, len(lines))
        chunks.append("\n".join(lines[start:end] if end > start else []))
    return chunks