"""Error types raised by monstack.

Every error maps to exit status 1 at the CLI boundary.
"""

from __future__ import annotations


class MonstackError(Exception):
    """Base error for monstack operations."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PrerequisiteError(MonstackError):
    """A required tool, file or platform is missing."""


class StepSelectionError(MonstackError):
    """Unknown step name in --step/--skip."""

    def __init__(self, step: str, flag: str = "--step"):
        self.step = step
        self.flag = flag
        label = "Unknown step to skip" if flag == "--skip" else "Unknown step"
        super().__init__(f"{label}: {step}")


class TemplateRenderError(MonstackError):
    """Template references a missing key or has a malformed placeholder."""

    def __init__(self, message: str, template: str | None = None, key: str | None = None):
        self.template = template
        self.key = key
        super().__init__(message)


class CommandError(MonstackError):
    """External command exited with a non-zero status."""

    def __init__(self, args: list[str], returncode: int, message: str | None = None):
        self.args_list = list(args)
        self.returncode = returncode
        super().__init__(message or f"Command failed (exit {returncode}): {' '.join(args)}")
