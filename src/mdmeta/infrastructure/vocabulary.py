"""Vocabulary lists — newline-separated valid metadata keys, one file per category."""

from __future__ import annotations

import logging
from pathlib import Path

from mdmeta.domain.types import TopicCategory

logger = logging.getLogger(__name__)


class VocabularyError(Exception):
    """A vocabulary list could not be read. Aborts the current run only."""

    def __init__(self, category: TopicCategory, path: Path, reason: str) -> None:
        super().__init__(f"Could not open the {category} tokens file {path}: {reason}")
        self.category = category
        self.path = path


def load_vocabulary(path: Path, category: TopicCategory) -> frozenset[str]:
    """Read the token list at *path*. Blank lines are ignored.

    Raises:
        VocabularyError: The file is missing or unreadable.
    """
    try:
        raw = path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        logger.debug("Vocabulary read failed for %s", path, exc_info=True)
        raise VocabularyError(category, path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise VocabularyError(category, path, "not valid UTF-8") from exc

    tokens = frozenset(line.strip() for line in raw.splitlines() if line.strip())
    logger.debug("Loaded %d %s tokens from %s", len(tokens), category, path)
    return tokens
