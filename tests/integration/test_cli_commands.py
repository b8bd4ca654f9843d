"""Integration tests for CLI commands.

Tests actual CLI invocations via subprocess.
"""

import subprocess
import sys

import pytest


def _run(*args, cwd=None):
    return subprocess.run(
        [sys.executable, "-m", "monstack_cli", *args],
        capture_output=True,
        text=True,
        cwd=cwd,
    )


@pytest.mark.integration
class TestCLIBasicCommands:
    """Test basic CLI commands."""

    def test_version(self):
        result = _run("version")

        assert result.returncode == 0
        assert "monstack version" in result.stdout

    def test_help(self):
        result = _run("--help")

        assert result.returncode == 0
        assert "Commands:" in result.stdout

    def test_unknown_command(self):
        result = _run("nonexistent")

        assert result.returncode == 1
        assert "Unknown command: nonexistent" in result.stderr


@pytest.mark.integration
class TestCLIInit:
    """Test init against a real project directory."""

    def test_generation_steps(self, project_dir):
        result = _run("init", "--skip=docker,compose", cwd=project_dir)

        assert result.returncode == 0, result.stderr
        assert (project_dir / ".env").exists()
        assert (project_dir / "generated_configs" / "alertmanager.yml").exists()
        assert "[STEP] Generating secrets..." in result.stdout
