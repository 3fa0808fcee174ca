"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from mdmeta.output.console import create_console, get_output, style_for_state, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from mdmeta.services.result import ServiceResult

_RECONCILE_OPS = frozenset({"update", "find_empty", "find_missing"})


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op in _RECONCILE_OPS:
        written = [f["file"] for f in result.data.get("files", []) if f["status"] == "modified"]
        return "\n".join(written)
    if result.op == "scan":
        return "\n".join(f"{i['file']}\t{i['state']}" for i in result.data.get("items", []))
    if result.op == "tokens":
        return "\n".join(result.data.get("items", []))

    return f"OK: {result.op}"


def summary_line(result: ServiceResult) -> str:
    """Batch summary for a reconcile result."""
    modified = result.data.get("modified", 0)
    if result.data.get("dry_run"):
        planned = sum(1 for f in result.data.get("files", []) if f["status"] == "planned")
        return f"Would modify {planned} files."
    if modified > 0:
        return f"Successfully modified {modified} files."
    return f'Didn\'t find any files to modify for "{result.data.get("key", "")}".'


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "mdm.ok"), (f"  {result.op}", "mdm.op")))


def _field(console: Console, key: str, value: Any) -> None:
    console.print(Text.assemble((f"  {key}: ", "mdm.key"), str(value)))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    line = Text(f"{prefix}")
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {span_data.get('name', '?')}")
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text.assemble(("ERROR", "mdm.error"), (f"  {result.op}", "mdm.op"), f" — {msg}"))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_reconcile(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """One line per document, then the batch summary."""
    _status_line(console, result)
    _field(console, "directory", result.data.get("directory", ""))
    _field(console, "key", result.data.get("key", ""))
    console.print()

    for outcome in result.data.get("files", []):
        status = outcome["status"]
        if status == "ignored" and not verbose:
            continue
        line = Text("  ")
        line.append(f"{status:<9}", style=style_for_status(status))
        line.append(outcome["message"])
        console.print(line)

    if result.data.get("aborted"):
        console.print(Text("  Stopped before the remaining files.", style="mdm.warning"))
    console.print()
    console.print(Text(summary_line(result)))
    if verbose:
        _render_meta(console, result)


def _render_scan(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Table of files with the key's state and value."""
    _status_line(console, result)
    _field(console, "key", result.data.get("key", ""))
    counts = result.data.get("counts", {})
    _field(console, "counts", ", ".join(f"{k}={v}" for k, v in counts.items()))

    items = result.data.get("items", [])
    if items:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("File", style="mdm.file", no_wrap=True)
        table.add_column("State")
        table.add_column("Line", justify="right")
        table.add_column("Value")
        for item in items:
            state = item["state"]
            table.add_row(
                Text(item["file"]),
                Text(state, style=style_for_state(state)),
                "" if item["line"] is None else str(item["line"]),
                Text(item["value"] or ""),
            )
        console.print()
        console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_tokens(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "category", result.data.get("category", ""))
    _field(console, "path", result.data.get("path", ""))
    _field(console, "count", result.data.get("count", 0))
    for token in result.data.get("items", []):
        console.print(Text(f"    {token}"))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "update": _render_reconcile,
    "find_empty": _render_reconcile,
    "find_missing": _render_reconcile,
    "scan": _render_scan,
    "tokens": _render_tokens,
}
