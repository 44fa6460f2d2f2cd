"""Structured logging setup for cfg-rust-features.

Standard output is the build-instruction channel that cargo parses, so every
log record goes to standard error (and optionally to a file).

Importing the package reads no settings and leaves the standard library's
root logger alone; only `setup_logging` (called by the command line) applies
the `logging` settings.
"""

import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from structlog.types import Processor

from .config import Settings, get_settings


class _TeeLoggerFactory:
    """Logger factory that writes to stderr and, if configured, a log file."""

    def __init__(self, file_path: Path | None = None) -> None:
        self._file = open(file_path, "a", buffering=1) if file_path else None  # line-buffered

    def __call__(self, *args: Any, **kwargs: Any) -> "_TeeLogger":
        return _TeeLogger(self._file)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


class _TeeLogger:
    """Logger that writes each message to stderr and an optional file."""

    def __init__(self, file: Any) -> None:
        self._file = file

    def msg(self, message: str) -> None:
        print(message, file=sys.stderr, flush=True)
        if self._file is not None:
            self._file.write(message + "\n")

    log = debug = info = warn = warning = msg
    fatal = failure = err = error = critical = msg


# Factory installed by the last setup_logging call; owns the log file handle
_factory: _TeeLoggerFactory | None = None


def _configure_defaults() -> None:
    """Stderr-only, WARNING and above, until the host or CLI configures structlog."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        context_class=dict,
        logger_factory=_TeeLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    settings: Settings | None = None,
) -> None:
    """
    Set up structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Output format ('json' or 'text')
        settings: Settings whose `logging` section applies; the cached ones when omitted
    """
    global _factory

    settings = settings or get_settings()
    log_level = (level or settings.logging.level).upper()
    log_format = format_type or settings.logging.format
    numeric_level = logging.getLevelName(log_level)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")

    log_file = None
    if settings.logging.file:
        log_file = Path(settings.logging.file).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)

    # Configure standard library logging for anything that logs through it
    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Shared processors for both formats
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        # Human-readable; no ANSI colors since cargo captures this output
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    if _factory is not None:
        _factory.close()
    _factory = _TeeLoggerFactory(log_file)

    # Not cached, so loggers bound earlier pick up a later reconfiguration
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=_factory,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance.

    If nothing has configured structlog yet, installs a stderr-only default
    first, since structlog's own default prints to stdout.

    Args:
        name: Logger name (usually __name__ of the calling module)

    Returns:
        Lazily bound structured logger
    """
    if not structlog.is_configured():
        _configure_defaults()
    return structlog.get_logger(name)
