"""Stack lifecycle management.

This module maps each controller verb onto ``docker compose`` calls against
the project's compose file. Output streams straight to the terminal; a failing
call raises ``CommandError`` and nothing after it runs.
"""

from __future__ import annotations

import time
from pathlib import Path

from ..errors import PrerequisiteError
from ..shared.logging import get_logger
from . import process

logger = get_logger(__name__)


class StackManager:
    """Manage the monitoring stack through docker compose."""

    def __init__(self, compose_file: Path, settle_seconds: float = 5.0):
        """Initialize stack manager.

        Args:
            compose_file: Path to docker-compose.yml. Commands run from its directory.
            settle_seconds: Pause after ``up`` to let containers start.
        """
        self.compose_file = compose_file
        self.compose_dir = compose_file.parent
        self.settle_seconds = settle_seconds

    def _compose_args(self, *args: str) -> list[str]:
        return ["docker", "compose", "-f", str(self.compose_file), *args]

    def _compose(self, *args: str) -> None:
        if not self.compose_file.exists():
            raise PrerequisiteError(f"Compose file not found: {self.compose_file}")
        logger.info("compose_command", args=list(args))
        process.run(self._compose_args(*args), cwd=self.compose_dir)

    def build(self) -> None:
        self._compose("build")

    def up(self) -> None:
        """Start containers detached, then wait for them to settle."""
        self._compose("up", "-d")
        if self.settle_seconds > 0:
            time.sleep(self.settle_seconds)

    def down(self, remove_volumes: bool = False, remove_orphans: bool = False) -> None:
        args = ["down"]
        if remove_volumes:
            args.append("-v")
        if remove_orphans:
            args.append("--remove-orphans")
        self._compose(*args)

    def restart(self) -> None:
        self.down()
        self.up()

    def logs(self, follow: bool = True, service: str | None = None, tail: int | None = None) -> None:
        """Show logs. Ctrl-C while following returns normally."""
        args = ["logs"]
        if follow:
            args.append("-f")
        if tail is not None:
            args.extend(["--tail", str(tail)])
        if service:
            args.append(service)
        try:
            self._compose(*args)
        except KeyboardInterrupt:
            logger.debug("logs_interrupted")

    def ps(self) -> None:
        self._compose("ps")

    def clean(self) -> None:
        """Remove containers, networks and volumes, then prune the system."""
        self.down(remove_volumes=True, remove_orphans=True)
        process.run(["docker", "system", "prune", "-f"], cwd=self.compose_dir)
