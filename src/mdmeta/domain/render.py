"""Render a metadata key and value back into front-matter lines."""

from __future__ import annotations

from collections.abc import Collection

# Keys whose value is written as a block list rather than a scalar.
DEFAULT_LIST_KEYS: frozenset[str] = frozenset(
    {"topic_type", "api_type", "api_location", "api_name", "product"}
)


def render_metadata_lines(
    key: str,
    value: str,
    list_keys: Collection[str] = DEFAULT_LIST_KEYS,
) -> list[str]:
    """Render *key* and a raw comma-separated *value* as one or more lines.

    List keys become ``key:`` followed by ``- segment`` per comma-separated
    segment. Segments are kept verbatim, surrounding whitespace included.

    Examples:
        >>> render_metadata_lines("product", "a,b")
        ['product:', '- a', '- b']
        >>> render_metadata_lines("ms.author", "jdoe")
        ['ms.author: jdoe']
    """
    if key in list_keys:
        return [f"{key}:", *(f"- {segment}" for segment in value.split(","))]
    return [f"{key}: {value}"]
