"""Shared helpers used by both the stack controller and the bootstrapper."""

from .logging import configure_logging, get_logger, level_for_verbosity

__all__ = [
    "configure_logging",
    "get_logger",
    "level_for_verbosity",
]
