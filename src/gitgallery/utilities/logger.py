"""Structured logging for the CLI and TUI.

Playback modules log through plain ``logging.getLogger(__name__)``; the
CLI logs through structlog.  Both end up on one stderr handler whose
``ProcessorFormatter`` renders every record the same way, either as
console lines or as one JSON object per line.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Any

import structlog

# Handler installed by the last ``setup_logging`` call
_handler: logging.Handler | None = None


def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def setup_logging(
    *,
    debug: bool = False,
    json_output: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """Route structlog and stdlib records through one renderer.

    Args:
        debug: Enable DEBUG level logging.
        json_output: Render JSON lines instead of console output.
        stream: Destination, ``sys.stderr`` when omitted.

    Calling it again replaces the handler from the previous call.
    """
    global _handler

    level = logging.DEBUG if debug else logging.INFO
    shared = _shared_processors()

    if json_output:
        final: list[Any] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final = [structlog.dev.ConsoleRenderer()]

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *final],
    )
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    root.addHandler(handler)
    root.setLevel(level)
    _handler = handler

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = "gitgallery", **kwargs: Any) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name, **kwargs)
