"""Rich console setup for human-readable output.

Renderers print into a Console whose file is a StringIO, and the caller
pulls the text back out with :func:`get_output`. Rich drops colour on its
own when the destination is not a terminal (pipes, CliRunner).

Per-file statuses and scan states each get a ``mdm.status.*`` /
``mdm.state.*`` style, generated from the colour tables below.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

from mdmeta.services.result import FileStatus

DEFAULT_WIDTH = 120

_STATUS_COLORS: dict[FileStatus, str] = {
    FileStatus.MODIFIED: "green",
    FileStatus.PLANNED: "cyan",
    FileStatus.SKIPPED: "yellow",
    FileStatus.IGNORED: "dim",
    FileStatus.ERROR: "red",
}

_STATE_COLORS: dict[str, str] = {
    "populated": "green",
    "empty": "yellow",
    "missing": "red",
}

MDMETA_THEME = Theme(
    {
        "mdm.ok": "bold green",
        "mdm.error": "bold red",
        "mdm.warning": "bold yellow",
        "mdm.op": "bold cyan",
        "mdm.key": "dim",
        "mdm.file": "bold",
        **{f"mdm.status.{status}": color for status, color in _STATUS_COLORS.items()},
        **{f"mdm.state.{state}": color for state, color in _STATE_COLORS.items()},
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Console writing into a fresh StringIO with the mdmeta theme."""
    return Console(
        file=StringIO(),
        theme=MDMETA_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    buffer = console.file
    assert isinstance(buffer, StringIO)
    return buffer.getvalue()


def style_for_status(status: str) -> str:
    """Theme style for a FileOutcome status."""
    return f"mdm.status.{status}"


def style_for_state(state: str) -> str:
    """Theme style for a scan state (populated / empty / missing)."""
    return f"mdm.state.{state}"
