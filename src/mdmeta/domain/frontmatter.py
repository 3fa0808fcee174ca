"""Front-matter line scanning — key/value splitting and key location.

The block is treated as raw lines, never as structured YAML. A line is
split on its first ``:``; the part before it is the key. The block is
delimited by the first two lines that are exactly ``---``.

INVARIANT: a document whose block is never closed reports every key as
"not found". Callers cannot tell that apart from a key that is genuinely
absent, so ``insert-missing`` appends such a key at end of file.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

DELIMITER = "---"


@dataclass(frozen=True)
class KeyValue:
    """One raw line split at its first colon."""

    key: str
    value: str
    has_colon: bool


@dataclass(frozen=True)
class ScanResult:
    """Classification of one document against one target key.

    Attributes:
        found: The key appears inside the front-matter block.
        populated: The trimmed value after the first colon is non-empty.
        line_index: Index of the matching line (``-1`` when not found).
        existing_value: Trimmed value text (``""`` when not found).
        insert_index: Index of the closing delimiter, i.e. where a missing
            key is inserted. Equals ``len(lines)`` for an unterminated block.
    """

    found: bool
    populated: bool = False
    line_index: int = -1
    existing_value: str = ""
    insert_index: int = 0


def split_key_value(line: str) -> KeyValue:
    """Split *line* at the first ``:``.

    Examples:
        >>> split_key_value("ms.author: jdoe")
        KeyValue(key='ms.author', value=' jdoe', has_colon=True)
        >>> split_key_value("---")
        KeyValue(key='---', value='', has_colon=False)
    """
    key, sep, value = line.partition(":")
    return KeyValue(key=key, value=value, has_colon=bool(sep))


def is_delimiter(line: str) -> bool:
    return line == DELIMITER


def locate_key(lines: Sequence[str], key: str) -> ScanResult:
    """Find *key* inside the front-matter block of *lines*.

    Scans from the top in a single pass. Lines at or after the second
    delimiter are never inspected. The first matching line wins.
    """
    delimiters = 0
    for index, line in enumerate(lines):
        if is_delimiter(line):
            delimiters += 1
            if delimiters == 2:
                return ScanResult(found=False, insert_index=index)
            continue
        kv = split_key_value(line)
        if kv.key == key:
            value = kv.value.strip()
            return ScanResult(
                found=True,
                populated=bool(value),
                line_index=index,
                existing_value=value,
                insert_index=_closing_delimiter(lines, index + 1, delimiters),
            )
    return ScanResult(found=False, insert_index=len(lines))


def _closing_delimiter(lines: Sequence[str], start: int, seen: int) -> int:
    """Index of the second delimiter at or after *start*, given *seen* so far."""
    for index in range(start, len(lines)):
        if is_delimiter(lines[index]):
            seen += 1
            if seen == 2:
                return index
    return len(lines)
