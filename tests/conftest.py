"""Shared test fixtures for monstack tests.

- project_dir: a temporary stack project with templates and a compose file
- fake_docker: records every external command instead of running it
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from dataclasses import dataclass, field
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

PROMETHEUS_TEMPLATE = """\
scrape_configs:
  - job_name: prometheus
    static_configs:
      - targets: ["${PROMETHEUS_ENDPOINT}:${PROMETHEUS_PORT}"]
  - job_name: node-exporter
    static_configs:
      - targets: ["${NODE_EXPORTER_ENDPOINT}:${NODE_EXPORTER_PORT}"]
"""

ALERTMANAGER_TEMPLATE = """\
receivers:
  - name: slack
    slack_configs:
      - channel: "${SLACK_CHANNEL}"
        title: '{{ .CommonLabels.alertname }}'
"""

ALERT_RULES_TEMPLATE = """\
groups:
  - name: node
    rules:
      - alert: InstanceDown
        expr: up == 0
        annotations:
          summary: "Instance {{ $labels.instance }} down (grafana on ${GRAFANA_PORT})"
"""


@dataclass
class FakeDocker:
    """Stand-in for subprocess.run that records commands."""

    calls: list[list[str]] = field(default_factory=list)
    fail_when: Callable[[list[str]], bool] = lambda args: False
    stdout: str = ""

    def __call__(self, args, *unused, **kwargs):
        args = list(args)
        self.calls.append(args)
        result = MagicMock(returncode=1 if self.fail_when(args) else 0)
        result.stdout = self.stdout.encode() if not kwargs.get("text") else self.stdout
        result.stderr = ""
        return result

    def compose_calls(self) -> list[list[str]]:
        """Compose subcommands issued against the project file, without the prefix."""
        return [c[4:] for c in self.calls if c[:3] == ["docker", "compose", "-f"]]


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a stack project directory with templates and a compose file."""
    for var in (
        "MONSTACK_COMPOSE_FILE",
        "MONSTACK_ENV_FILE",
        "MONSTACK_TEMPLATES_DIR",
        "MONSTACK_GENERATED_DIR",
        "MONSTACK_SECRETS_DIR",
        "MONSTACK_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("MONSTACK_SETTLE_SECONDS", "0")

    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "prometheus.yml.template").write_text(PROMETHEUS_TEMPLATE)
    (templates / "alertmanager.yml.template").write_text(ALERTMANAGER_TEMPLATE)
    (templates / "alert_rules.yml.template").write_text(ALERT_RULES_TEMPLATE)
    (tmp_path / "docker-compose.yml").write_text("services:\n  prometheus:\n    image: prom/prometheus\n")
    return tmp_path


@pytest.fixture
def fake_docker() -> Generator[FakeDocker, None, None]:
    """Patch subprocess.run and shutil.which so no real command runs."""
    fake = FakeDocker()
    with patch("shutil.which", return_value="/usr/bin/docker"):
        with patch("subprocess.run", side_effect=fake):
            yield fake


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()
