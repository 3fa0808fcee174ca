"""Filesystem operations for Markdown documents.

Pure scanning and rewrite logic lives in :mod:`mdmeta.domain`. This module
handles document discovery, reading a document into lines, and writing the
rewritten lines back.

INVARIANT: a write replaces the whole file via temp file + rename, so a
reader never observes a partially written document.
"""

from __future__ import annotations

import codecs
import os
import tempfile
from collections.abc import Collection, Sequence
from dataclasses import dataclass
from pathlib import Path

# Never processed, whatever the requested action.
EXCLUDED_FILES: frozenset[str] = frozenset({"index.md", "TOC.md"})

MARKDOWN_SUFFIX = ".md"


@dataclass(frozen=True)
class DocumentText:
    """A document split into lines, with what is needed to write it back byte for byte.

    ``endings[i]`` is the terminator of ``lines[i]``; only the last one can be
    ``""`` (no trailing newline).
    """

    lines: list[str]
    endings: list[str]
    bom: bool = False


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def find_markdown_files(directory: Path) -> list[Path]:
    """All ``*.md`` files directly inside *directory*, sorted by name.

    Subdirectories are not searched. Excluded names are included here so
    the caller can report them as ignored.
    """
    results = [
        path
        for path in directory.iterdir()
        if path.suffix == MARKDOWN_SUFFIX and path.is_file()
    ]
    return sorted(results, key=lambda p: p.name)


def is_excluded(path: Path, excluded: Collection[str] = EXCLUDED_FILES) -> bool:
    return path.name in excluded


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def split_lines(text: str) -> tuple[list[str], list[str]]:
    """Split *text* into lines and their terminators (``\\r\\n``, ``\\n`` or ``""``).

    Only ``\\n`` ends a line; a lone ``\\r`` stays part of the line text.
    """
    lines: list[str] = []
    endings: list[str] = []
    pieces = text.split("\n")
    for piece in pieces[:-1]:
        if piece.endswith("\r"):
            lines.append(piece[:-1])
            endings.append("\r\n")
        else:
            lines.append(piece)
            endings.append("\n")
    if pieces[-1]:
        lines.append(pieces[-1])
        endings.append("")
    return lines, endings


def read_document(path: Path) -> DocumentText:
    """Read *path* into lines with terminators stripped.

    A leading UTF-8 byte order mark is removed from the text and recorded
    in ``bom``.

    Raises:
        OSError: The file cannot be opened or read.
        UnicodeDecodeError: The file is not valid UTF-8.
    """
    raw = path.read_bytes()
    bom = raw.startswith(codecs.BOM_UTF8)
    lines, endings = split_lines(raw.decode("utf-8-sig"))
    return DocumentText(lines=lines, endings=endings, bom=bom)


def write_document(
    path: Path,
    lines: Sequence[str],
    *,
    endings: Sequence[str] | None = None,
    bom: bool = False,
) -> None:
    """Overwrite *path* with *lines* atomically using temp file + rename.

    *endings* gives each line's terminator; without it every line ends in
    ``\\n``. The temp file is created beside *path* so the rename stays on
    one filesystem. The original file mode is kept.

    Raises:
        ValueError: *endings* does not have one entry per line.
        OSError: The temp file cannot be created, written, or renamed.
    """
    if endings is None:
        endings = ["\n"] * len(lines)
    if len(endings) != len(lines):
        msg = f"Got {len(endings)} line endings for {len(lines)} lines"
        raise ValueError(msg)
    data = "".join(line + ending for line, ending in zip(lines, endings)).encode("utf-8")
    if bom:
        data = codecs.BOM_UTF8 + data

    mode = path.stat().st_mode if path.exists() else None
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        if mode is not None:
            os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
