"""Structured logging for :mod:`dojodoc`.

Library code only ever asks for a logger through :func:`get_logger`; the CLI
decides where events go by calling :func:`configure_logging` once per run.
Console output is rendered by Rich on stderr so stdout stays usable for
JSON and source output, and an optional file receives one JSON object per
event.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
import structlog

Logger = structlog.stdlib.BoundLogger

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Applied to structlog events and to records from plain stdlib loggers.
_SHARED_PROCESSORS: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def resolve_level(level: str) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value.

    Raises:
        ValueError: If ``level`` is not one of :data:`LOG_LEVELS`.
    """

    name = level.strip().upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unsupported log level: {level!r}")
    return logging.getLevelNamesMapping()[name]


def _formatter(renderer: Any) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def _console_handler(console: Console | None) -> logging.Handler:
    handler = RichHandler(
        console=console or Console(stderr=True),
        markup=False,
        rich_tracebacks=True,
        show_path=False,
        log_time_format="%H:%M:%S",
    )
    handler.setFormatter(_formatter(structlog.dev.ConsoleRenderer(colors=False)))
    return handler


def _json_file_handler(log_file: str | Path) -> logging.Handler:
    path = Path(log_file).expanduser().resolve(strict=False)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8", delay=True)
    handler.setFormatter(
        _formatter(structlog.processors.JSONRenderer(sort_keys=True))
    )
    return handler


def configure_logging(
    *,
    level: str = "WARNING",
    log_file: str | Path | None = None,
    console: Console | None = None,
) -> None:
    """Send structlog and stdlib events to the console and an optional file.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Log level name (case-insensitive).
        log_file: Optional path receiving JSON-rendered events.
        console: Optional Rich console override, primarily for testing.

    Raises:
        ValueError: If ``level`` is not a recognized log level name.
    """

    numeric_level = resolve_level(level)

    structlog.reset_defaults()
    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers = [_console_handler(console)]
    if log_file is not None:
        handlers.append(_json_file_handler(log_file))

    root = logging.getLogger()
    for stale in list(root.handlers):
        root.removeHandler(stale)
        stale.close()
    for handler in handlers:
        handler.setLevel(numeric_level)
        root.addHandler(handler)
    root.setLevel(numeric_level)
    logging.captureWarnings(True)


def get_logger(name: str | None = None, **initial_context: Any) -> Logger:
    """Return a structlog logger with ``initial_context`` already bound.

    Example:
        >>> logger = get_logger(__name__, component="processor")
        >>> logger.debug("return-slot-created")
    """

    return structlog.get_logger(name).bind(**initial_context)


__all__ = ["LOG_LEVELS", "Logger", "configure_logging", "get_logger", "resolve_level"]
