"""Apply a RewritePlan to a document's lines. Pure; no file access."""

from __future__ import annotations

from collections.abc import Sequence

from mdmeta.domain.actions import PlanKind, RewritePlan


def apply_plan(lines: Sequence[str], plan: RewritePlan) -> list[str]:
    """Return a new line sequence with *plan* applied.

    REPLACE drops the line at ``plan.index`` and emits the rendered lines in
    its place. INSERT emits them before ``plan.index``. SKIP copies *lines*.
    """
    if plan.kind is PlanKind.SKIP:
        return list(lines)

    index = plan.index
    if not 0 <= index <= len(lines) or (plan.kind is PlanKind.REPLACE and index == len(lines)):
        msg = f"Plan index {index} out of range for {len(lines)} lines"
        raise IndexError(msg)

    tail_start = index + 1 if plan.kind is PlanKind.REPLACE else index
    return [*lines[:index], *plan.lines, *lines[tail_start:]]


def rewrite_endings(endings: Sequence[str], plan: RewritePlan) -> list[str]:
    """Line terminators matching ``apply_plan(lines, plan)``.

    *endings* holds one terminator per line; only the last may be ``""``.
    Untouched lines keep their own terminator. Rendered lines take the
    terminator of the line they replace or are inserted before; appended
    lines take the terminator of the line above them. Whether the document
    ends with a newline does not change.
    """
    if plan.kind is PlanKind.SKIP:
        return list(endings)

    index = plan.index
    fallback = next((e for e in endings if e), "\n")
    count = len(plan.lines)

    if plan.kind is PlanKind.REPLACE:
        own = endings[index]
        inner = [own or fallback] * (count - 1)
        return [*endings[:index], *inner, own, *endings[index + 1 :]]

    if index < len(endings):
        return [*endings[:index], *[endings[index] or fallback] * count, *endings[index:]]

    # Appended at end of file: the old last line gains a terminator.
    if not endings:
        return [fallback] * count
    last = endings[-1]
    above = last or (endings[-2] if len(endings) > 1 and endings[-2] else fallback)
    return [*endings[:-1], above, *[above] * (count - 1), last]
