"""File generation for ``monstack init``.

Writes the ``.env`` file, the secret files, and the Prometheus/Alertmanager
configs rendered from ``templates/*.yml.template``.
"""

from __future__ import annotations

import os
import re
from collections import ChainMap
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from string import Template

from dotenv import dotenv_values

from ..errors import PrerequisiteError, TemplateRenderError
from ..shared.logging import get_logger

logger = get_logger(__name__)

SLACK_WEBHOOK_PLACEHOLDER = (
    "https://hooks.slack.com/services/T00000000/B00000000/XXXXXXXXXXXXXXXXXXXX"
)

# filename -> default contents
DEFAULT_SECRETS: dict[str, str] = {
    "grafana_admin_password.txt": "admin123",
    "alertmanager_password.txt": "alert123",
    "slack_webhook.txt": SLACK_WEBHOOK_PLACEHOLDER,
}


class EnvFileGenerator:
    """Write the .env file consumed by compose and the templates."""

    def __init__(self, env_file: Path):
        self.env_file = env_file

    def render(self, sections: Mapping[str, Mapping[str, str]]) -> str:
        blocks = []
        for section, values in sections.items():
            lines = [f"# {section}"]
            lines.extend(f"{key}={value}" for key, value in values.items())
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks) + "\n"

    def generate(self, sections: Mapping[str, Mapping[str, str]]) -> Path:
        """Write the env file, replacing any existing one."""
        self.env_file.parent.mkdir(parents=True, exist_ok=True)
        self.env_file.write_text(self.render(sections))
        return self.env_file


def load_env_file(env_file: Path) -> dict[str, str]:
    """Parse a .env file into a dict. Keys without a value are dropped."""
    if not env_file.exists():
        raise PrerequisiteError(".env missing!")
    return {key: value for key, value in dotenv_values(env_file).items() if value is not None}


class SecretsGenerator:
    """Create secret files that don't exist yet. Existing files are left untouched."""

    def __init__(self, secrets_dir: Path, defaults: Mapping[str, str] | None = None):
        self.secrets_dir = secrets_dir
        self.defaults = dict(DEFAULT_SECRETS if defaults is None else defaults)

    def generate(self) -> tuple[list[Path], list[Path]]:
        """Create missing secrets.

        Returns:
            Tuple of (created, kept) paths.
        """
        self.secrets_dir.mkdir(parents=True, exist_ok=True)
        created: list[Path] = []
        kept: list[Path] = []
        for name, value in self.defaults.items():
            path = self.secrets_dir / name
            if path.exists():
                kept.append(path)
                continue
            path.write_text(value + "\n")
            created.append(path)
        logger.debug("secrets_generated", created=len(created), kept=len(kept))
        return created, kept


class EnvTemplate(Template):
    """``${NAME}`` placeholders only.

    Bare ``$name`` is left as-is so Prometheus/Alertmanager template syntax
    such as ``{{ $labels.instance }}`` passes through. ``$$`` is a literal ``$``.
    """

    pattern = r"""
    \$(?:
      (?P<escaped>\$) |
      \{(?P<braced>[_a-zA-Z][_a-zA-Z0-9]*)\} |
      (?P<named>(?!)) |
      (?P<invalid>\{)
    )
    """
    flags = re.VERBOSE


class TemplateRenderer:
    """Substitute ``${NAME}`` placeholders from a mapping, failing on missing keys."""

    def __init__(self, values: Mapping[str, str]):
        self.values = values

    def render(self, text: str, source: str = "<template>") -> str:
        try:
            return EnvTemplate(text).substitute(self.values)
        except KeyError as e:
            key = e.args[0]
            raise TemplateRenderError(
                f"Template {source} references undefined variable: {key}",
                template=source,
                key=key,
            ) from None
        except ValueError as e:
            raise TemplateRenderError(f"Template {source}: {e}", template=source) from None


@dataclass
class ConfigArtifact:
    """A config file rendered from a template."""

    name: str
    template: Path
    output: Path


class ConfigGenerator:
    """Render a config template into the generated configs directory."""

    def __init__(self, env_file: Path, environ: Mapping[str, str] | None = None):
        self.env_file = env_file
        self.environ = os.environ if environ is None else environ

    def values(self) -> Mapping[str, str]:
        """Process environment overlaid by .env (as ``set -a; source .env``)."""
        return ChainMap(load_env_file(self.env_file), dict(self.environ))

    def generate(self, artifact: ConfigArtifact) -> Path:
        """Render ``artifact.template`` to ``artifact.output``.

        Nothing is written unless rendering succeeds.

        Raises:
            PrerequisiteError: Template or .env missing.
            TemplateRenderError: Template references an undefined variable.
        """
        if not artifact.template.exists():
            raise PrerequisiteError(f"Template not found: {artifact.template}")
        values = self.values()

        rendered = TemplateRenderer(values).render(
            artifact.template.read_text(), source=str(artifact.template)
        )
        artifact.output.parent.mkdir(parents=True, exist_ok=True)
        artifact.output.write_text(rendered)
        logger.debug("config_rendered", name=artifact.name, output=str(artifact.output))
        return artifact.output
