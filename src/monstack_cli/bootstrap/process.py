"""Thin wrapper around subprocess for the external tools monstack drives.

Each call blocks until the child exits. A non-zero exit raises
``CommandError`` unless ``check`` is False.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from ..errors import CommandError, PrerequisiteError
from ..shared.logging import get_logger

logger = get_logger(__name__)


def run(
    args: list[str],
    cwd: Path | None = None,
    check: bool = True,
    capture: bool = False,
    input: bytes | None = None,
    timeout: float | None = None,
) -> subprocess.CompletedProcess:
    """Run a command, streaming output to the terminal unless ``capture``.

    Raises:
        PrerequisiteError: The executable is not installed.
        CommandError: The command exited non-zero and ``check`` is set.
    """
    logger.debug("run_command", args=args, cwd=str(cwd) if cwd else None)
    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            input=input,
            capture_output=capture,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise PrerequisiteError(f"{args[0]} not found. Is it installed?") from e

    if check and result.returncode != 0:
        logger.info("command_failed", args=args, returncode=result.returncode)
        raise CommandError(args, result.returncode)
    return result


def succeeds(args: list[str], timeout: float = 10) -> bool:
    """Return True if the command exits 0; output is discarded."""
    try:
        result = subprocess.run(args, capture_output=True, timeout=timeout)
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return False
    return result.returncode == 0
