"""ReconcileService — scan a directory and reconcile one metadata key.

Pipeline per document: READ → LOCATE → DECIDE → (SUPPLY VALUE) → RENDER →
RE-READ → APPLY → COMMIT.

Documents are processed strictly one after another. A per-file failure
becomes a FileOutcome with status ``error`` and never stops the batch.
Only an :class:`Abort` raised by the value supplier ends the batch early,
and only between documents.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from mdmeta.config.logging import bind_batch_context
from mdmeta.domain.actions import (
    Action,
    PlanKind,
    RewritePlan,
    SkipReason,
    needs_value,
    plan_rewrite,
)
from mdmeta.domain.frontmatter import ScanResult, locate_key
from mdmeta.domain.render import render_metadata_lines
from mdmeta.domain.rewrite import apply_plan, rewrite_endings
from mdmeta.domain.types import TopicCategory, is_valid_token
from mdmeta.infrastructure.filesystem import (
    find_markdown_files,
    is_excluded,
    read_document,
    write_document,
)
from mdmeta.infrastructure.vocabulary import VocabularyError
from mdmeta.services.base import BaseService
from mdmeta.services.result import FileOutcome, FileStatus, ServiceResult
from mdmeta.services.telemetry import trace_span, traced

log = structlog.get_logger(__name__)


class Abort(Exception):
    """Raised by a value supplier to stop the batch before the next document."""


# Called for each document that will be written. Returns the raw value,
# or None to leave this document alone.
ValueSupplier = Callable[[Path, ScanResult], str | None]


@dataclass(frozen=True)
class ReconcileRequest:
    """Fully resolved inputs for one directory pass."""

    action: Action
    directory: Path
    key: str
    category: TopicCategory
    value: str | None = None
    dry_run: bool = False


_SKIP_MESSAGES: dict[SkipReason, str] = {
    SkipReason.TOKEN_ABSENT: (
        'Cannot update "{key}" in {file} because the file did not contain the token.'
    ),
    SkipReason.TOKEN_EMPTY: 'Cannot update "{key}" in {file} because the token has no value.',
    SkipReason.NOT_FOUND: '"{key}" was not found in {file}.',
    SkipReason.ALREADY_POPULATED: '"{key}" already had a value in {file}.',
    SkipReason.ALREADY_PRESENT: 'Found "{key}" in {file} with this value: {value}.',
}


def skip_message(reason: SkipReason, key: str, file: str, value: str = "") -> str:
    return _SKIP_MESSAGES[reason].format(key=key, file=file, value=value)


class ReconcileService(BaseService):
    """Reconciles a metadata key across the Markdown files of one directory."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def reconcile(
        self,
        request: ReconcileRequest,
        *,
        supplier: ValueSupplier | None = None,
    ) -> ServiceResult:
        """Apply ``request.action`` to every eligible document.

        Either ``request.value`` or *supplier* must be given. With a fixed
        value every written document gets the same rendered lines.
        """
        op = str(request.action)

        invalid = self._validate(op, request.directory, request.key, request.category)
        if invalid is not None:
            return invalid

        fixed_lines: list[str] | None = None
        if request.value is not None:
            if not request.value.strip():
                return self._failure(op, "INVALID_VALUE", "Metadata value must not be empty.")
            fixed_lines = self._render(request.key, request.value)
        elif supplier is None:
            return self._failure(
                op, "INVALID_VALUE", "A metadata value or a per-file value supplier is required."
            )

        outcomes: list[FileOutcome] = []
        warnings: list[str] = []
        modified = 0
        aborted = False

        with bind_batch_context(action=op, key=request.key, directory=str(request.directory)):
            for path in find_markdown_files(request.directory):
                if is_excluded(path, self._settings.scan.excluded_files):
                    outcomes.append(_ignored(path))
                    continue
                with trace_span(path.name) as span:
                    try:
                        outcome = self._process(request, path, fixed_lines, supplier)
                    except Abort:
                        log.info("batch.aborted", file=path.name)
                        aborted = True
                        break
                    if span is not None:
                        span.annotate("status", str(outcome.status))
                outcomes.append(outcome)
                if outcome.status is FileStatus.MODIFIED:
                    modified += 1
                elif outcome.status is FileStatus.ERROR:
                    warnings.append(outcome.message)

            log.info(
                "batch.complete",
                modified=modified,
                files=len(outcomes),
                aborted=aborted,
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "directory": str(request.directory),
                "key": request.key,
                "dry_run": request.dry_run,
                "modified": modified,
                "aborted": aborted,
                "files": [o.model_dump(mode="json") for o in outcomes],
            },
            warnings=warnings,
        )

    @traced
    def scan(self, directory: Path, key: str, category: TopicCategory) -> ServiceResult:
        """Classify every eligible document against *key* without writing."""
        op = "scan"
        invalid = self._validate(op, directory, key, category)
        if invalid is not None:
            return invalid

        items: list[dict[str, Any]] = []
        warnings: list[str] = []
        counts = {"populated": 0, "empty": 0, "missing": 0}
        for path in find_markdown_files(directory):
            if is_excluded(path, self._settings.scan.excluded_files):
                continue
            try:
                document = read_document(path)
            except (OSError, UnicodeDecodeError):
                log.warning("file.error", file=path.name, exc_info=True)
                warnings.append(f"Could not open {path.name}.")
                continue
            result = locate_key(document.lines, key)
            state = _scan_state(result)
            counts[state] += 1
            items.append(
                {
                    "file": path.name,
                    "state": state,
                    "line": result.line_index + 1 if result.found else None,
                    "value": result.existing_value if result.found else None,
                }
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={"directory": str(directory), "key": key, "counts": counts, "items": items},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Per-document pipeline
    # ------------------------------------------------------------------

    def _process(
        self,
        request: ReconcileRequest,
        path: Path,
        fixed_lines: list[str] | None,
        supplier: ValueSupplier | None,
    ) -> FileOutcome:
        name = path.name

        # ── READ / LOCATE / DECIDE ───────────────────────────
        try:
            document = read_document(path)
        except (OSError, UnicodeDecodeError):
            return _error(path, f"Could not open {name}.")
        scan = locate_key(document.lines, request.key)

        if not needs_value(request.action, scan):
            return self._skipped(request, path, plan_rewrite(request.action, scan), scan)

        # ── SUPPLY VALUE / RENDER ────────────────────────────
        lines = fixed_lines
        if lines is None:
            assert supplier is not None
            value = supplier(path, scan)
            if value is None:
                log.info("file.skipped", file=name, reason="operator")
                return FileOutcome(
                    file=name,
                    status=FileStatus.SKIPPED,
                    message=f"Skipping {name}.",
                    reason="operator",
                )
            lines = self._render(request.key, value)

        # ── RE-READ / APPLY ──────────────────────────────────
        # The document may have changed while the supplier was prompting.
        try:
            document = read_document(path)
        except (OSError, UnicodeDecodeError):
            return _error(path, f"Could not open {name}.")
        scan = locate_key(document.lines, request.key)
        plan = plan_rewrite(request.action, scan, lines)
        if plan.is_skip:
            return self._skipped(request, path, plan, scan)

        rendered = '\\n'.join(plan.lines)
        if request.dry_run:
            return FileOutcome(
                file=name,
                status=FileStatus.PLANNED,
                message=f'Would insert "{rendered}" into {name}{_position(plan)}.',
                lines=list(plan.lines),
            )

        # ── COMMIT ───────────────────────────────────────────
        try:
            write_document(
                path,
                apply_plan(document.lines, plan),
                endings=rewrite_endings(document.endings, plan),
                bom=document.bom,
            )
        except OSError:
            return _error(path, f"Could not write {name}.")

        log.info("file.modified", file=name, kind=str(plan.kind), index=plan.index)
        return FileOutcome(
            file=name,
            status=FileStatus.MODIFIED,
            message=f'Successfully inserted "{rendered}" into {name}.',
            lines=list(plan.lines),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate(
        self, op: str, directory: Path, key: str, category: TopicCategory
    ) -> ServiceResult | None:
        """Return a failure result for unusable inputs, else None."""
        if not directory.is_dir():
            return self._failure(
                op, "NOT_A_DIRECTORY", f"{directory} does not exist on disk.", path=str(directory)
            )
        try:
            vocabulary = self._vocabulary(category)
        except VocabularyError as exc:
            return self._failure(
                op, "VOCABULARY_UNAVAILABLE", str(exc), category=str(category), path=str(exc.path)
            )
        if not is_valid_token(key, vocabulary):
            return self._failure(
                op,
                "INVALID_TOKEN",
                f"Invalid metadata token: {key!r} is not a valid {category} token.",
                key=key,
            )
        return None

    def _render(self, key: str, value: str) -> list[str]:
        return render_metadata_lines(key, value, self._settings.metadata.list_keys)

    @staticmethod
    def _skipped(
        request: ReconcileRequest, path: Path, plan: RewritePlan, scan: ScanResult
    ) -> FileOutcome:
        assert plan.reason is not None
        log.info("file.skipped", file=path.name, reason=str(plan.reason))
        return FileOutcome(
            file=path.name,
            status=FileStatus.SKIPPED,
            message=skip_message(plan.reason, request.key, path.name, scan.existing_value),
            reason=str(plan.reason),
            existing_value=scan.existing_value if scan.found else None,
        )


def _ignored(path: Path) -> FileOutcome:
    return FileOutcome(file=path.name, status=FileStatus.IGNORED, message=f"Ignoring {path.name}.")


def _error(path: Path, message: str) -> FileOutcome:
    log.warning("file.error", file=path.name, error=message, exc_info=True)
    return FileOutcome(file=path.name, status=FileStatus.ERROR, message=message)


def _position(plan: RewritePlan) -> str:
    if plan.kind is PlanKind.REPLACE:
        return f" at line {plan.index + 1}"
    return f" before line {plan.index + 1}"


def _scan_state(result: ScanResult) -> str:
    if not result.found:
        return "missing"
    return "populated" if result.populated else "empty"
