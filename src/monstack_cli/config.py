"""Project configuration.

Handles the optional ``monstack.yaml`` stored in the project directory.
Supports environment variable overrides and CLI flag precedence.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .shared.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILENAME = "monstack.yaml"

# Default values
DEFAULT_COMPOSE_FILE = "docker-compose.yml"
DEFAULT_ENV_FILE = ".env"
DEFAULT_TEMPLATES_DIR = "templates"
DEFAULT_GENERATED_DIR = "generated_configs"
DEFAULT_SECRETS_DIR = "secrets"
DEFAULT_SETTLE_SECONDS = 5.0
DEFAULT_LOG_LEVEL = "warning"

# Contents of a freshly generated .env, grouped by section header
ENV_DEFAULTS: dict[str, dict[str, str]] = {
    "Ports": {
        "PROMETHEUS_PORT": "9090",
        "NODE_EXPORTER_PORT": "9100",
        "GRAFANA_PORT": "3000",
        "ALERTMANAGER_PORT": "9093",
    },
    "Endpoints": {
        "PROMETHEUS_ENDPOINT": "prometheus",
        "NODE_EXPORTER_ENDPOINT": "node-exporter",
        "GRAFANA_ENDPOINT": "grafana",
        "ALERTMANAGER_ENDPOINT": "alertmanager",
    },
    "Slack": {
        "SLACK_CHANNEL": "#alerts",
    },
}

ENV_KEYS = [key for section in ENV_DEFAULTS.values() for key in section]

# Environment variable mappings
ENV_VARS = {
    "compose_file": "MONSTACK_COMPOSE_FILE",
    "env_file": "MONSTACK_ENV_FILE",
    "templates_dir": "MONSTACK_TEMPLATES_DIR",
    "generated_dir": "MONSTACK_GENERATED_DIR",
    "secrets_dir": "MONSTACK_SECRETS_DIR",
    "settle_seconds": "MONSTACK_SETTLE_SECONDS",
    "log_level": "MONSTACK_LOG_LEVEL",
}

_PATH_KEYS = ["compose_file", "env_file", "templates_dir", "generated_dir", "secrets_dir"]


@dataclass
class StackConfig:
    """Effective configuration for one invocation."""

    project_dir: Path = field(default_factory=Path.cwd)
    compose_file: str = DEFAULT_COMPOSE_FILE
    env_file: str = DEFAULT_ENV_FILE
    templates_dir: str = DEFAULT_TEMPLATES_DIR
    generated_dir: str = DEFAULT_GENERATED_DIR
    secrets_dir: str = DEFAULT_SECRETS_DIR
    settle_seconds: float = DEFAULT_SETTLE_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL
    env_overrides: dict[str, str] = field(default_factory=dict)

    # Track where each value came from
    _sources: dict[str, str] = field(default_factory=dict)

    def get_source(self, key: str) -> str:
        """Get the source of a config value."""
        return self._sources.get(key, "default")

    def sources(self) -> dict[str, str]:
        """Where each config value came from."""
        return dict(self._sources)

    def resolve(self, value: str) -> Path:
        """Resolve a configured path against the project directory."""
        path = Path(value)
        return path if path.is_absolute() else self.project_dir / path

    @property
    def compose_path(self) -> Path:
        return self.resolve(self.compose_file)

    @property
    def env_path(self) -> Path:
        return self.resolve(self.env_file)

    @property
    def templates_path(self) -> Path:
        return self.resolve(self.templates_dir)

    @property
    def generated_path(self) -> Path:
        return self.resolve(self.generated_dir)

    @property
    def secrets_path(self) -> Path:
        return self.resolve(self.secrets_dir)

    def env_values(self) -> dict[str, dict[str, str]]:
        """Sectioned .env contents with overrides applied."""
        sections = {}
        for section, values in ENV_DEFAULTS.items():
            sections[section] = {
                key: self.env_overrides.get(key, default) for key, default in values.items()
            }
        return sections

    def to_dict(self) -> dict[str, Any]:
        """Effective values, for display."""
        data: dict[str, Any] = {"project_dir": str(self.project_dir)}
        for key in _PATH_KEYS:
            data[key] = getattr(self, key)
        data["settle_seconds"] = self.settle_seconds
        data["log_level"] = self.log_level
        if self.env_overrides:
            data["env"] = dict(self.env_overrides)
        return data


def get_config_path(project_dir: Path) -> Path:
    """Get the config file path for a project directory."""
    return project_dir / CONFIG_FILENAME


def _parse_env_overrides(raw: Any) -> dict[str, str]:
    if not isinstance(raw, dict):
        logger.warning("config_env_not_mapping", value=raw)
        return {}
    overrides = {}
    for key, value in raw.items():
        if key not in ENV_KEYS:
            logger.warning("config_env_unknown_key", key=key)
            continue
        if value is None:
            logger.warning("config_value_null", key=f"env.{key}")
            continue
        overrides[key] = str(value)
    return overrides


def load_config(
    project_dir: Path | None = None,
    compose_file: str | None = None,
) -> StackConfig:
    """Load project configuration.

    Precedence (highest to lowest):
    1. CLI flags (``compose_file``)
    2. Environment variables
    3. Config file (<project>/monstack.yaml)
    4. Defaults

    Returns:
        StackConfig with values and sources
    """
    config = StackConfig(project_dir=(project_dir or Path.cwd()).resolve())
    sources: dict[str, str] = {key: "default" for key in ENV_VARS}

    config_path = get_config_path(config.project_dir)
    if config_path.exists():
        try:
            with open(config_path) as f:
                file_config = yaml.safe_load(f) or {}
            if not isinstance(file_config, dict):
                raise ValueError("top level must be a mapping")

            for key in list(file_config):
                if file_config[key] is None:
                    logger.warning("config_value_null", key=key)
                    del file_config[key]

            for key in _PATH_KEYS + ["log_level"]:
                if key in file_config:
                    setattr(config, key, str(file_config[key]))
                    sources[key] = "config file"
            if "settle_seconds" in file_config:
                config.settle_seconds = float(file_config["settle_seconds"])
                sources["settle_seconds"] = "config file"
            if "env" in file_config:
                config.env_overrides = _parse_env_overrides(file_config["env"])
                sources["env"] = "config file"
        except (OSError, yaml.YAMLError, ValueError, TypeError, AttributeError) as e:
            logger.warning("config_file_ignored", path=str(config_path), error=str(e))

    for key, var in ENV_VARS.items():
        value = os.environ.get(var)
        if not value:
            continue
        if key == "settle_seconds":
            try:
                config.settle_seconds = float(value)
            except ValueError:
                continue
        else:
            setattr(config, key, value)
        sources[key] = "environment"

    if compose_file:
        config.compose_file = compose_file
        sources["compose_file"] = "command line"

    config._sources = sources
    return config
