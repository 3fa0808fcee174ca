"""BaseService — shared foundation for mdmeta services.

Every service receives the run's :class:`MdmetaSettings`. The vocabulary
for a category is read at most once per service instance.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mdmeta.infrastructure.vocabulary import load_vocabulary
from mdmeta.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from mdmeta.config.settings import MdmetaSettings
    from mdmeta.domain.types import TopicCategory

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ReconcileService(BaseService):
            def reconcile(self, request) -> ServiceResult:
                vocabulary = self._vocabulary(request.category)
                ...
    """

    def __init__(self, settings: MdmetaSettings) -> None:
        self._settings = settings
        self._vocabularies: dict[TopicCategory, frozenset[str]] = {}

    def _vocabulary(self, category: TopicCategory) -> frozenset[str]:
        """Token list for *category*, loaded on first use.

        Raises:
            VocabularyError: The list cannot be read.
        """
        if category not in self._vocabularies:
            path = self._settings.vocabulary_path(category)
            self._vocabularies[category] = load_vocabulary(path, category)
        return self._vocabularies[category]

    @staticmethod
    def _failure(op: str, code: str, message: str, **detail: object) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=dict(detail)),
        )
