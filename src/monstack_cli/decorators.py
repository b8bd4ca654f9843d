"""Command classes and decorators shared by all monstack commands.

Usage errors (unknown command, unknown option) exit with status 1 after
printing the command's help, and ``MonstackError`` raised inside a command
becomes an ``[ERROR]`` line plus exit status 1.
"""

import sys
from functools import wraps
from typing import Callable, NoReturn

import click

from . import formatters
from .errors import MonstackError, StepSelectionError


def _fail_with_usage(ctx: click.Context, message: str) -> NoReturn:
    formatters.print_error(message)
    click.echo(ctx.get_help())
    ctx.exit(1)


class FailFastCommand(click.Command):
    """Command that reports bad options with its help text and exit status 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            _fail_with_usage(ctx, e.format_message())


class StackGroup(click.Group):
    """Top-level group: unknown commands print help and exit 1."""

    command_class = FailFastCommand

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            _fail_with_usage(ctx, e.format_message())

    def resolve_command(self, ctx: click.Context, args: list[str]):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError:
            _fail_with_usage(ctx, f"Unknown command: {args[0] if args else ''}")


def handle_errors(func: Callable) -> Callable:
    """Turn MonstackError into an [ERROR] line and exit status 1.

    Step selection errors also print the command's help.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except StepSelectionError as e:
            formatters.print_error(e.message)
            click.echo(click.get_current_context().get_help())
            sys.exit(1)
        except MonstackError as e:
            formatters.print_error(e.message)
            sys.exit(1)

    return wrapper
