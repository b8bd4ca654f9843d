"""Prerequisite detection and installation.

This module checks the host platform, the Docker daemon and the Docker
Compose plugin, and installs Docker/Compose on Ubuntu when asked to.
"""

from __future__ import annotations

import platform
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from ..errors import PrerequisiteError
from . import process

OS_RELEASE = Path("/etc/os-release")

DOCKER_GPG_URL = "https://download.docker.com/linux/ubuntu/gpg"
DOCKER_KEYRING = "/usr/share/keyrings/docker-archive-keyring.gpg"
DOCKER_APT_SOURCE = "/etc/apt/sources.list.d/docker.list"
DOCKER_APT_PREREQS = [
    "apt-transport-https",
    "ca-certificates",
    "curl",
    "software-properties-common",
]
DOCKER_PACKAGES = ["docker-ce", "docker-ce-cli", "containerd.io"]

COMPOSE_VERSION = "v2.39.1"
COMPOSE_BINARY = "/usr/local/bin/docker-compose"


class DockerDetector:
    """Detect Docker Engine and Compose availability."""

    def is_installed(self) -> bool:
        return shutil.which("docker") is not None

    def is_running(self) -> bool:
        """Check the daemon answers ``docker info``."""
        return process.succeeds(["docker", "info"])

    def compose_version(self) -> str | None:
        """Return the compose plugin version, or None if unavailable."""
        try:
            result = subprocess.run(
                ["docker", "compose", "version", "--short"],
                capture_output=True,
                text=True,
                timeout=10,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip() or "unknown"

    def require_running(self) -> None:
        """Raise PrerequisiteError unless the Docker daemon is reachable."""
        if not self.is_running():
            raise PrerequisiteError("Docker is not running. Please start Docker first.")


@dataclass
class PlatformInfo:
    """Host platform detection result."""

    system: str
    is_linux: bool
    is_ubuntu: bool


class PlatformChecker:
    """Validate the host can run the install steps."""

    def __init__(self, os_release: Path = OS_RELEASE):
        self.os_release = os_release

    def detect(self) -> PlatformInfo:
        system = platform.system()
        is_ubuntu = False
        if self.os_release.exists():
            is_ubuntu = "ubuntu" in self.os_release.read_text(errors="replace").lower()
        return PlatformInfo(system=system, is_linux=system == "Linux", is_ubuntu=is_ubuntu)

    def require_linux(self) -> PlatformInfo:
        """Return platform info, raising PrerequisiteError off Linux."""
        info = self.detect()
        if not info.is_linux:
            raise PrerequisiteError("This script supports only Linux.")
        return info


class DockerInstaller:
    """Install Docker Engine and the Compose binary on Ubuntu via sudo."""

    def install_docker(self) -> None:
        """Add Docker's apt repository and install the engine packages."""
        process.run(["sudo", "apt", "update", "-y"])
        process.run(["sudo", "apt", "install", "-y", *DOCKER_APT_PREREQS])

        key = process.run(["curl", "-fsSL", DOCKER_GPG_URL], capture=True).stdout
        process.run(["sudo", "gpg", "--dearmor", "--yes", "-o", DOCKER_KEYRING], input=key)

        arch = process.run(["dpkg", "--print-architecture"], capture=True).stdout.decode().strip()
        codename = process.run(["lsb_release", "-cs"], capture=True).stdout.decode().strip()
        source = (
            f"deb [arch={arch} signed-by={DOCKER_KEYRING}] "
            f"https://download.docker.com/linux/ubuntu {codename} stable\n"
        )
        process.run(["sudo", "tee", DOCKER_APT_SOURCE], input=source.encode(), capture=True)

        process.run(["sudo", "apt", "update", "-y"])
        process.run(["sudo", "apt", "install", "-y", *DOCKER_PACKAGES])
        process.run(["sudo", "systemctl", "enable", "docker"])
        process.run(["sudo", "systemctl", "start", "docker"])

    def compose_download_url(self) -> str:
        return (
            f"https://github.com/docker/compose/releases/download/{COMPOSE_VERSION}/"
            f"docker-compose-{platform.system()}-{platform.machine()}"
        )

    def install_compose(self) -> None:
        """Download the standalone compose binary."""
        process.run(["sudo", "curl", "-L", self.compose_download_url(), "-o", COMPOSE_BINARY])
        process.run(["sudo", "chmod", "+x", COMPOSE_BINARY])
