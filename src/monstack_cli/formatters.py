"""CLI output formatting helpers.

Status lines carry a colored ``[LEVEL]`` prefix. Errors go to stderr.
"""

from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.text import Text

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def _line(prefix: str, style: str, message: str) -> Text:
    return Text.assemble((f"[{prefix}]", style), " ", message)


def print_status(message: str) -> None:
    console.print(_line("INFO", "blue", message), soft_wrap=True)


def print_success(message: str) -> None:
    console.print(_line("SUCCESS", "green", message), soft_wrap=True)


def print_warning(message: str) -> None:
    console.print(_line("WARNING", "bold yellow", message), soft_wrap=True)


def print_error(message: str) -> None:
    err_console.print(_line("ERROR", "red", message), soft_wrap=True)


def print_step(message: str) -> None:
    """Heading for one bootstrap step."""
    console.print(_line("STEP", "blue", message), soft_wrap=True)


def print_config_yaml(data: dict[str, Any], sources: dict[str, str] | None = None) -> None:
    """Print effective configuration as YAML.

    Args:
        data: Configuration values
        sources: Optional mapping of key to where the value came from
    """
    click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False).rstrip())
    if sources:
        click.echo("\nSources:")
        for key, source in sources.items():
            click.echo(f"  {key}: {source}")


def print_written(paths: list[Path], root: Path) -> None:
    """List files written by a bootstrap run, relative to ``root`` where possible."""
    if not paths:
        print_status("No files written.")
        return
    names = []
    for path in paths:
        try:
            names.append(str(path.relative_to(root)))
        except ValueError:
            names.append(str(path))
    print_status(f"Files written: {', '.join(names)}")
