"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, mdmeta.toml only contains overrides.
An empty (or absent) mdmeta.toml reproduces the stock behavior.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from mdmeta.domain.render import DEFAULT_LIST_KEYS
from mdmeta.domain.types import TopicCategory
from mdmeta.infrastructure.filesystem import EXCLUDED_FILES


class VocabularyConfig(BaseModel):
    """[vocabulary] section.

    ``directory`` is resolved against the directory holding mdmeta.toml,
    or the current directory when there is no config file.
    """

    model_config = {"frozen": True}

    directory: str = "."
    reference_file: str = "MetadataTokensForRef.txt"
    conceptual_file: str = "MetadataTokensForConceptual.txt"

    def filename_for(self, category: TopicCategory) -> str:
        if category is TopicCategory.REFERENCE:
            return self.reference_file
        return self.conceptual_file


class MetadataConfig(BaseModel):
    """[metadata] section."""

    model_config = {"frozen": True}

    list_keys: frozenset[str] = Field(default=DEFAULT_LIST_KEYS)


class ScanConfig(BaseModel):
    """[scan] section."""

    model_config = {"frozen": True}

    excluded_files: frozenset[str] = Field(default=EXCLUDED_FILES)


class MdmetaConfig(BaseModel):
    """Root configuration composing all mdmeta.toml sections."""

    model_config = {"frozen": True}

    vocabulary: VocabularyConfig = Field(default_factory=VocabularyConfig)
    metadata: MetadataConfig = Field(default_factory=MetadataConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
