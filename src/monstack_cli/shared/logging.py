"""Logging configuration for monstack.

Diagnostic events go through structlog to stderr. User-facing status lines
are printed separately by ``monstack_cli.formatters``.
"""

import logging
import sys

import structlog

_VERBOSITY_LEVELS = ["warning", "info", "debug"]


def level_for_verbosity(verbose: int, default: str = "warning") -> str:
    """Map a -v count to a level name.

    No flag keeps ``default``; each -v steps one level down from warning.
    """
    if verbose <= 0:
        return default
    return _VERBOSITY_LEVELS[min(verbose, len(_VERBOSITY_LEVELS) - 1)]


def configure_logging(level: str = "warning") -> None:
    """Configure standard logging and structlog.

    Called once per invocation from the CLI group callback.

    Args:
        level: Log level (debug, info, warning, error, critical)
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(log_level)

    logging.basicConfig(
        level=log_level,
        handlers=[stream_handler],
        format="%(message)s",
        force=True,
    )

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="%H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to ``name`` (typically __name__)."""
    return structlog.get_logger(name)
