"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``MDMETA_*`` prefix
  3. TOML file    — ``mdmeta.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the walk-up discovery from :mod:`mdmeta.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from mdmeta.config.discovery import find_config
from mdmeta.config.models import MetadataConfig, ScanConfig, VocabularyConfig
from mdmeta.domain.types import TopicCategory


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``mdmeta.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class MdmetaSettings(BaseSettings):
    """Unified settings for the mdmeta CLI.

    Stored on the :class:`~mdmeta.commands._context.AppContext` created by
    the root CLI group. Frozen after construction.

    Attributes:
        config_root: Directory holding ``mdmeta.toml`` (or CWD if none);
            relative vocabulary paths resolve against it.
        config_path: The TOML file in use, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "MDMETA_",
        "env_nested_delimiter": "__",
    }

    config_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    # --- TOML sections ---
    vocabulary: VocabularyConfig = Field(default_factory=VocabularyConfig)
    metadata: MetadataConfig = Field(default_factory=MetadataConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        config_root: Path | None = None,
        **cli_flags: Any,
    ) -> MdmetaSettings:
        """Construct settings from a CLI invocation.

        Discovers ``mdmeta.toml`` via walk-up (or explicit *config_path*),
        resolves *config_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(config_root)

        resolved_root = config_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                config_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    def vocabulary_path(self, category: TopicCategory) -> Path:
        """Absolute path of the token list for *category*."""
        directory = Path(self.vocabulary.directory)
        if not directory.is_absolute():
            directory = self.config_root / directory
        return directory / self.vocabulary.filename_for(category)
