"""ServiceResult, ServiceError, and FileOutcome — the service contract.

INVARIANT: All service-layer methods return ServiceResult.
Per-file failures never surface as errors; they become FileOutcome entries
inside a successful result, plus a warning.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"find_missing"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None


class FileStatus(StrEnum):
    MODIFIED = "modified"
    PLANNED = "planned"
    SKIPPED = "skipped"
    IGNORED = "ignored"
    ERROR = "error"


class FileOutcome(BaseModel):
    """What happened to one document during a batch.

    ``lines`` holds the rendered lines written (or planned) for the file.
    ``reason`` is the skip reason when ``status`` is ``skipped``.
    """

    model_config = {"frozen": True}

    file: str
    status: FileStatus
    message: str
    lines: list[str] = Field(default_factory=list)
    reason: str | None = None
    existing_value: str | None = None
