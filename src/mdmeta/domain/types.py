"""Topic categories and the vocabulary check."""

from __future__ import annotations

from collections.abc import Collection
from enum import StrEnum


class TopicCategory(StrEnum):
    """Which controlled vocabulary applies to the documents being scanned."""

    REFERENCE = "reference"
    CONCEPTUAL = "conceptual"


_CATEGORY_ALIASES: dict[str, TopicCategory] = {
    "ref": TopicCategory.REFERENCE,
    "reference": TopicCategory.REFERENCE,
    "conceptual": TopicCategory.CONCEPTUAL,
}


def parse_category(name: str) -> TopicCategory:
    """Resolve a category name or alias, case-insensitively.

    Raises:
        ValueError: *name* is not a known category.
    """
    try:
        return _CATEGORY_ALIASES[name.strip().lower()]
    except KeyError:
        msg = f"Unknown topic category: {name!r} (expected 'reference' or 'conceptual')"
        raise ValueError(msg) from None


def is_valid_token(token: str, vocabulary: Collection[str]) -> bool:
    """Membership test only; the vocabulary's own content is not validated."""
    return bool(token) and token in vocabulary
