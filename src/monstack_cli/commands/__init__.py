"""CLI command implementations."""

from .init import init
from .stack import STACK_COMMANDS

__all__ = ["init", "STACK_COMMANDS"]
