"""Bootstrap package for the monitoring stack.

This package provides:
1. Prerequisite detection (platform, Docker daemon, Compose plugin)
2. Optional Docker/Compose installation on Ubuntu
3. Step selection from --step/--skip
4. Generation of .env, secrets and configs from templates
5. docker compose lifecycle management for the stack
"""

from .generators import (
    DEFAULT_SECRETS,
    ConfigArtifact,
    ConfigGenerator,
    EnvFileGenerator,
    EnvTemplate,
    SecretsGenerator,
    TemplateRenderer,
    load_env_file,
)
from .prerequisites import (
    DockerDetector,
    DockerInstaller,
    PlatformChecker,
    PlatformInfo,
)
from .runner import BootstrapResult, Bootstrapper
from .stack import StackManager
from .steps import (
    EXECUTION_ORDER,
    GENERATION_STEPS,
    Step,
    StepDirective,
    StepSelection,
    directives_from_args,
)

__all__ = [
    # Prerequisites
    "DockerDetector",
    "DockerInstaller",
    "PlatformChecker",
    "PlatformInfo",
    # Steps
    "Step",
    "StepDirective",
    "StepSelection",
    "EXECUTION_ORDER",
    "GENERATION_STEPS",
    "directives_from_args",
    # Generation
    "DEFAULT_SECRETS",
    "ConfigArtifact",
    "ConfigGenerator",
    "EnvFileGenerator",
    "EnvTemplate",
    "SecretsGenerator",
    "TemplateRenderer",
    "load_env_file",
    # Execution
    "Bootstrapper",
    "BootstrapResult",
    # Stack management
    "StackManager",
]
