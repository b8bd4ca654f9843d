"""Execute a step selection in the fixed order.

Each step is a straight-line action; the first failure propagates and
stops the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .. import formatters
from ..config import StackConfig
from ..shared.logging import get_logger
from .generators import ConfigArtifact, ConfigGenerator, EnvFileGenerator, SecretsGenerator
from .prerequisites import DockerDetector, DockerInstaller, PlatformChecker
from .steps import Step, StepSelection

logger = get_logger(__name__)

# step -> (template stem, heading)
CONFIG_STEPS: dict[Step, tuple[str, str]] = {
    Step.PROMETHEUS: ("prometheus", "Prometheus config"),
    Step.ALERTMANAGER: ("alertmanager", "Alertmanager config"),
    Step.ALERT_RULES: ("alert_rules", "Prometheus alert rules"),
}


@dataclass
class BootstrapResult:
    """What a bootstrap run did."""

    steps_run: list[Step] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)


class Bootstrapper:
    """Run the environment setup steps for a project."""

    def __init__(
        self,
        config: StackConfig,
        install_docker: bool = False,
        detector: DockerDetector | None = None,
        installer: DockerInstaller | None = None,
        platform_checker: PlatformChecker | None = None,
    ):
        self.config = config
        self.install_docker = install_docker
        self.detector = detector or DockerDetector()
        self.installer = installer or DockerInstaller()
        self.platform_checker = platform_checker or PlatformChecker()

    def artifact_for(self, step: Step) -> ConfigArtifact:
        stem, _ = CONFIG_STEPS[step]
        return ConfigArtifact(
            name=stem,
            template=self.config.templates_path / f"{stem}.yml.template",
            output=self.config.generated_path / f"{stem}.yml",
        )

    def run(self, selection: StepSelection, keep_existing_env: bool = False) -> BootstrapResult:
        """Run every enabled step in execution order.

        Args:
            selection: Steps to run.
            keep_existing_env: Leave an existing .env alone instead of overwriting.
        """
        result = BootstrapResult()
        logger.info("bootstrap_start", steps=selection.names())

        if Step.DOCKER in selection or Step.COMPOSE in selection:
            info = self.platform_checker.require_linux()
            if not info.is_ubuntu:
                formatters.print_warning(
                    "Non-Ubuntu OS detected. Docker installation may require manual steps."
                )

        for step in selection:
            if step == Step.DOCKER:
                self._install_docker()
            elif step == Step.COMPOSE:
                self._install_compose()
            elif step == Step.ENV:
                path = self._generate_env(keep_existing_env)
                if path:
                    result.written.append(path)
            elif step == Step.SECRETS:
                result.written.extend(self._generate_secrets())
            else:
                result.written.append(self._generate_config(step))
            result.steps_run.append(step)

        return result

    def _install_docker(self) -> None:
        formatters.print_step("Checking Docker installation...")
        if self.detector.is_installed():
            formatters.print_status("Docker is already installed.")
        elif self.install_docker:
            formatters.print_status("Installing Docker...")
            self.installer.install_docker()
            formatters.print_status("Docker installed successfully.")
        else:
            formatters.print_warning("Docker not found. Use --install-docker to install.")

    def _install_compose(self) -> None:
        formatters.print_step("Checking Docker Compose...")
        if self.detector.compose_version() is not None:
            formatters.print_status("Docker Compose is already installed.")
        elif self.install_docker:
            formatters.print_status("Installing Docker Compose...")
            self.installer.install_compose()
            formatters.print_status("Docker Compose installed successfully.")
        else:
            formatters.print_warning("Docker Compose not found. Use --install-docker to install.")

    def _generate_env(self, keep_existing: bool) -> Path | None:
        env_path = self.config.env_path
        if env_path.exists() and keep_existing:
            formatters.print_status(f"Using existing {self.config.env_file}")
            return None
        formatters.print_step("Generating .env file...")
        if env_path.exists():
            formatters.print_warning(f"{self.config.env_file} already exists. Overwriting...")
        EnvFileGenerator(env_path).generate(self.config.env_values())
        formatters.print_status(".env file created/updated.")
        return env_path

    def _generate_secrets(self) -> list[Path]:
        formatters.print_step("Generating secrets...")
        created, kept = SecretsGenerator(self.config.secrets_path).generate()
        for path in kept:
            formatters.print_status(f"Secret {path.name} exists. Keeping it.")
        for path in created:
            formatters.print_status(f"Created secret {path.name}.")
            if path.name == "slack_webhook.txt":
                formatters.print_warning("Slack webhook secret is a placeholder. Update with real URL.")
        return created

    def _generate_config(self, step: Step) -> Path:
        _, heading = CONFIG_STEPS[step]
        formatters.print_step(f"Generating {heading}...")
        artifact = self.artifact_for(step)
        output = ConfigGenerator(self.config.env_path).generate(artifact)
        formatters.print_status(f"{heading} generated at {output}")
        return output
