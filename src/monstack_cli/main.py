"""CLI main entry point."""

from pathlib import Path

import click

from . import formatters
from .commands import STACK_COMMANDS, init
from .config import DEFAULT_LOG_LEVEL, load_config
from .decorators import StackGroup
from .shared.logging import configure_logging, level_for_verbosity

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=StackGroup, invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.option(
    "-C",
    "--project-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project directory (default: current directory)",
)
@click.option("-f", "--compose-file", default=None, help="Compose file, relative to the project")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity")
@click.pass_context
def cli(ctx: click.Context, project_dir: Path | None, compose_file: str | None, verbose: int) -> None:
    """Manage the infrastructure monitoring stack.

    Prometheus, Grafana, Node Exporter and Alertmanager run under docker
    compose. Use `monstack init` to generate .env, secrets and configs, then
    `monstack up` to start the stack.
    """
    ctx.ensure_object(dict)
    configure_logging(level_for_verbosity(verbose))
    config = load_config(project_dir, compose_file=compose_file)
    if not verbose and config.log_level != DEFAULT_LOG_LEVEL:
        configure_logging(config.log_level)
    ctx.obj["config"] = config

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command("help")
@click.pass_context
def help_command(ctx: click.Context) -> None:
    """Show this help message."""
    click.echo(ctx.parent.get_help() if ctx.parent else ctx.get_help())


@cli.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    click.echo(f"monstack version {__version__}")


@cli.command("config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show effective configuration and where each value came from."""
    config = ctx.obj["config"]
    formatters.print_config_yaml(config.to_dict(), config.sources())


for command in STACK_COMMANDS:
    cli.add_command(command)
cli.add_command(init)


def main() -> None:
    """Console script entry point."""
    cli(prog_name="monstack")
