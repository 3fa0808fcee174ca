"""VocabularyService — list the valid metadata tokens for a topic category."""

from __future__ import annotations

from mdmeta.domain.types import TopicCategory
from mdmeta.infrastructure.vocabulary import VocabularyError
from mdmeta.services.base import BaseService
from mdmeta.services.result import ServiceResult
from mdmeta.services.telemetry import traced


class VocabularyService(BaseService):
    """Read-only access to the per-category token lists."""

    @traced
    def list_tokens(self, category: TopicCategory) -> ServiceResult:
        op = "tokens"
        try:
            vocabulary = self._vocabulary(category)
        except VocabularyError as exc:
            return self._failure(
                op, "VOCABULARY_UNAVAILABLE", str(exc), category=str(category), path=str(exc.path)
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "category": str(category),
                "path": str(self._settings.vocabulary_path(category)),
                "count": len(vocabulary),
                "items": sorted(vocabulary),
            },
        )
