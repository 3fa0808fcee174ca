"""Reconcile actions and the rewrite decision table.

Every action is a lookup in :data:`DECISION_TABLE`, keyed by
``(action, found, populated)``. A row either skips the file with a
:class:`SkipReason` or targets a line: replace the matching line, or
insert before the closing delimiter.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from mdmeta.domain.frontmatter import ScanResult


class Action(StrEnum):
    """What the operator wants done with the target key."""

    UPDATE = "update"
    FIND_EMPTY = "find_empty"
    FIND_MISSING = "find_missing"


class PlanKind(StrEnum):
    REPLACE = "replace"
    INSERT = "insert"
    SKIP = "skip"


class SkipReason(StrEnum):
    """Why a file was left untouched."""

    TOKEN_ABSENT = "token_absent"
    TOKEN_EMPTY = "token_empty"
    NOT_FOUND = "not_found"
    ALREADY_POPULATED = "already_populated"
    ALREADY_PRESENT = "already_present"


@dataclass(frozen=True)
class RewritePlan:
    """Where (and whether) to write rendered lines into a document."""

    kind: PlanKind
    index: int = -1
    lines: tuple[str, ...] = ()
    reason: SkipReason | None = None

    @property
    def is_skip(self) -> bool:
        return self.kind is PlanKind.SKIP


# (action, found, populated) -> PlanKind or SkipReason.
# ``populated`` is meaningless when ``found`` is False; both values map alike.
DECISION_TABLE: dict[tuple[Action, bool, bool], PlanKind | SkipReason] = {
    (Action.UPDATE, False, False): SkipReason.TOKEN_ABSENT,
    (Action.UPDATE, False, True): SkipReason.TOKEN_ABSENT,
    (Action.UPDATE, True, False): SkipReason.TOKEN_EMPTY,
    (Action.UPDATE, True, True): PlanKind.REPLACE,
    (Action.FIND_EMPTY, False, False): SkipReason.NOT_FOUND,
    (Action.FIND_EMPTY, False, True): SkipReason.NOT_FOUND,
    (Action.FIND_EMPTY, True, True): SkipReason.ALREADY_POPULATED,
    (Action.FIND_EMPTY, True, False): PlanKind.REPLACE,
    (Action.FIND_MISSING, True, False): SkipReason.ALREADY_PRESENT,
    (Action.FIND_MISSING, True, True): SkipReason.ALREADY_PRESENT,
    (Action.FIND_MISSING, False, False): PlanKind.INSERT,
    (Action.FIND_MISSING, False, True): PlanKind.INSERT,
}


def decide(action: Action, scan: ScanResult) -> PlanKind | SkipReason:
    """Look up the table row for *action* against *scan*."""
    return DECISION_TABLE[(action, scan.found, scan.populated)]


def needs_value(action: Action, scan: ScanResult) -> bool:
    """True when the file will be written, so a value must be supplied."""
    return isinstance(decide(action, scan), PlanKind)


def plan_rewrite(action: Action, scan: ScanResult, rendered: Sequence[str] = ()) -> RewritePlan:
    """Build the :class:`RewritePlan` for one document.

    *rendered* is ignored for skip rows, so callers may pass it empty when
    they only want the decision.
    """
    decision = decide(action, scan)
    if isinstance(decision, SkipReason):
        return RewritePlan(kind=PlanKind.SKIP, reason=decision)
    if decision is PlanKind.REPLACE:
        return RewritePlan(kind=decision, index=scan.line_index, lines=tuple(rendered))
    return RewritePlan(kind=decision, index=scan.insert_index, lines=tuple(rendered))
