"""Unit tests for project configuration."""

from __future__ import annotations

from monstack_cli.config import DEFAULT_COMPOSE_FILE, load_config


class TestLoadConfig:
    """Tests for load_config precedence."""

    def test_defaults(self, project_dir):
        config = load_config(project_dir)

        assert config.compose_file == DEFAULT_COMPOSE_FILE
        assert config.compose_path == project_dir.resolve() / "docker-compose.yml"
        assert config.env_path == project_dir.resolve() / ".env"
        assert config.get_source("compose_file") == "default"

    def test_config_file(self, project_dir):
        (project_dir / "monstack.yaml").write_text(
            "generated_dir: out\nsettle_seconds: 2\nenv:\n  SLACK_CHANNEL: '#ops'\n"
        )
        config = load_config(project_dir)

        assert config.generated_path == project_dir.resolve() / "out"
        assert config.get_source("generated_dir") == "config file"
        assert config.env_values()["Slack"]["SLACK_CHANNEL"] == "#ops"

    def test_environment_beats_file(self, project_dir, monkeypatch):
        (project_dir / "monstack.yaml").write_text("secrets_dir: from-file\n")
        monkeypatch.setenv("MONSTACK_SECRETS_DIR", "from-env")
        config = load_config(project_dir)

        assert config.secrets_dir == "from-env"
        assert config.get_source("secrets_dir") == "environment"

    def test_command_line_beats_environment(self, project_dir, monkeypatch):
        monkeypatch.setenv("MONSTACK_COMPOSE_FILE", "env.yml")
        config = load_config(project_dir, compose_file="cli.yml")

        assert config.compose_file == "cli.yml"
        assert config.get_source("compose_file") == "command line"

    def test_absolute_path_kept(self, project_dir, tmp_path_factory):
        elsewhere = tmp_path_factory.mktemp("elsewhere")
        config = load_config(project_dir, compose_file=str(elsewhere / "stack.yml"))
        assert config.compose_path == elsewhere / "stack.yml"

    def test_unknown_env_override_ignored(self, project_dir):
        (project_dir / "monstack.yaml").write_text("env:\n  NOT_A_KEY: x\n  GRAFANA_PORT: 3001\n")
        config = load_config(project_dir)
        assert config.env_overrides == {"GRAFANA_PORT": "3001"}

    def test_invalid_file_ignored(self, project_dir):
        (project_dir / "monstack.yaml").write_text("- just\n- a list\n")
        config = load_config(project_dir)
        assert config.get_source("compose_file") == "default"

    def test_bad_settle_seconds_env_ignored(self, project_dir, monkeypatch):
        monkeypatch.setenv("MONSTACK_SETTLE_SECONDS", "soon")
        config = load_config(project_dir)
        assert config.settle_seconds == 5.0

    def test_empty_file_value_keeps_default(self, project_dir):
        (project_dir / "monstack.yaml").write_text("compose_file:\nsecrets_dir: vault\n")
        config = load_config(project_dir)

        assert config.compose_file == DEFAULT_COMPOSE_FILE
        assert config.get_source("compose_file") == "default"
        assert config.secrets_dir == "vault"

    def test_empty_env_override_skipped(self, project_dir):
        (project_dir / "monstack.yaml").write_text("env:\n  GRAFANA_PORT:\n  SLACK_CHANNEL: '#ops'\n")
        config = load_config(project_dir)

        assert config.env_overrides == {"SLACK_CHANNEL": "#ops"}
        assert config.env_values()["Ports"]["GRAFANA_PORT"] == "3000"
