"""Stack controller commands.

Each verb checks that the Docker daemon is reachable, then runs its
``docker compose`` call(s). The first failing call ends the command with
exit status 1.
"""

from __future__ import annotations

import click

from .. import formatters
from ..bootstrap import (
    GENERATION_STEPS,
    Bootstrapper,
    DockerDetector,
    StackManager,
    Step,
    StepSelection,
)
from ..config import StackConfig
from ..decorators import FailFastCommand, handle_errors

FULL_SETUP_STEPS = StepSelection.only({Step.ENV, Step.SECRETS} | GENERATION_STEPS)


def _stack_manager(ctx: click.Context) -> StackManager:
    config: StackConfig = ctx.obj["config"]
    DockerDetector().require_running()
    return StackManager(config.compose_path, settle_seconds=config.settle_seconds)


def _start(manager: StackManager) -> None:
    formatters.print_status("Starting Docker containers...")
    manager.up()
    formatters.print_success("Containers started.")


def _stop(manager: StackManager) -> None:
    formatters.print_status("Stopping Docker containers...")
    manager.down()
    formatters.print_success("Containers stopped.")


@click.command(cls=FailFastCommand)
@click.pass_context
@handle_errors
def build(ctx: click.Context) -> None:
    """Build Docker containers."""
    manager = _stack_manager(ctx)
    formatters.print_status("Building Docker containers...")
    manager.build()
    formatters.print_success("Containers built successfully.")


@click.command(cls=FailFastCommand)
@click.pass_context
@handle_errors
def up(ctx: click.Context) -> None:
    """Start containers in detached mode."""
    _start(_stack_manager(ctx))


@click.command(cls=FailFastCommand)
@click.pass_context
@handle_errors
def down(ctx: click.Context) -> None:
    """Stop and remove containers."""
    _stop(_stack_manager(ctx))


@click.command(cls=FailFastCommand)
@click.pass_context
@handle_errors
def restart(ctx: click.Context) -> None:
    """Restart containers."""
    manager = _stack_manager(ctx)
    formatters.print_status("Restarting Docker containers...")
    manager.restart()
    formatters.print_success("Containers restarted.")


@click.command(cls=FailFastCommand)
@click.option("--service", "-s", default=None, help="Show logs for a specific service")
@click.option("--tail", default=None, type=int, help="Number of lines to show from the end")
@click.pass_context
@handle_errors
def logs(ctx: click.Context, service: str | None, tail: int | None) -> None:
    """View container logs (follows until Ctrl-C)."""
    manager = _stack_manager(ctx)
    formatters.print_status("Displaying container logs...")
    manager.logs(follow=True, service=service, tail=tail)


@click.command(cls=FailFastCommand)
@click.pass_context
@handle_errors
def status(ctx: click.Context) -> None:
    """Show container status."""
    manager = _stack_manager(ctx)
    formatters.print_status("Container status:")
    manager.ps()


@click.command(cls=FailFastCommand)
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
@handle_errors
def clean(ctx: click.Context, yes: bool) -> None:
    """Clean containers, networks and volumes.

    Answering no at the prompt cancels and exits 0. If input ends before an
    answer is given the command aborts with exit 1; use --yes when stdin is
    not a terminal.
    """
    manager = _stack_manager(ctx)
    formatters.print_warning("This will remove containers, networks, and volumes!")
    if not yes and not click.confirm("Are you sure?", default=False):
        formatters.print_status("Cleanup cancelled.")
        return
    manager.clean()
    formatters.print_success("Cleanup completed.")


@click.command("full-setup", cls=FailFastCommand)
@click.pass_context
@handle_errors
def full_setup(ctx: click.Context) -> None:
    """Complete setup: .env, secrets, configs, start stack."""
    config: StackConfig = ctx.obj["config"]
    formatters.print_status("Running full setup...")
    manager = _stack_manager(ctx)

    result = Bootstrapper(config).run(FULL_SETUP_STEPS, keep_existing_env=True)
    formatters.print_written(result.written, config.project_dir)
    _start(manager)

    formatters.print_success(
        f"Full setup completed! Access services at the ports defined in {config.env_file}"
    )


STACK_COMMANDS = [build, up, down, restart, logs, status, clean, full_setup]
