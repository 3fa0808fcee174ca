"""structlog configuration for mdmeta.

Everything goes to stderr so stdout stays reserved for command results.
Human runs get the console renderer; ``--log-json`` gets one JSON object
per line. Records from plain stdlib loggers pass through the same chain.

Batch context (action, key, directory) is bound with
:func:`bind_batch_context` and merged into every event logged inside it.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

PACKAGE_LOGGER = "mdmeta"
_HANDLER_NAME = "mdmeta-stderr"


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _stderr_handler(log_json: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )
    return handler


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib logging to a single stderr handler.

    Args:
        verbose: ``mdmeta.*`` loggers emit DEBUG and up; otherwise WARNING.
            Other libraries stay at WARNING either way.
        log_json: Render JSON lines instead of console output.
    """
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_stderr_handler(log_json))
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)


@contextmanager
def bind_batch_context(**values: Any) -> Iterator[None]:
    """Attach *values* to every event logged until the block exits."""
    with structlog.contextvars.bound_contextvars(**values):
        yield
