"""Environment bootstrapper command.

``monstack init`` resolves the step selection from --step/--skip (applied in
the order given on the command line) and runs the enabled steps.
"""

from __future__ import annotations

import click

from .. import formatters
from ..bootstrap import Bootstrapper, Step, StepSelection, directives_from_args
from ..config import StackConfig
from ..decorators import FailFastCommand, handle_errors

_STEP_LIST = ",".join(Step.names())


class InitCommand(FailFastCommand):
    """Records --step/--skip in command-line order before click groups them."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.meta["monstack.step_directives"] = directives_from_args(args)
        return super().parse_args(ctx, args)


@click.command(cls=InitCommand)
@click.option("--install-docker", is_flag=True, help="Install Docker and Compose if not present")
@click.option(
    "--step",
    "steps",
    multiple=True,
    expose_value=False,
    metavar="LIST",
    help=f"Run only these steps: {_STEP_LIST},all",
)
@click.option(
    "--skip",
    "skips",
    multiple=True,
    expose_value=False,
    metavar="LIST",
    help=f"Skip these steps: {_STEP_LIST}",
)
@click.pass_context
@handle_errors
def init(ctx: click.Context, install_docker: bool) -> None:
    """Generate .env, secrets and configs for the stack.

    With no --step/--skip every step runs. The first --step narrows the run to
    the listed steps; --skip removes steps. Flags apply left to right.

    Examples:

        monstack init --install-docker

        monstack init --step=env,secrets

        monstack init --skip=docker,compose
    """
    config: StackConfig = ctx.obj["config"]
    selection = StepSelection.resolve(ctx.meta.get("monstack.step_directives", []))

    formatters.print_status("Starting Infrastructure Monitoring setup...")
    result = Bootstrapper(config, install_docker=install_docker).run(selection)
    formatters.print_status(f"Setup complete! All configs generated in {config.generated_path}")
    formatters.print_written(result.written, config.project_dir)
