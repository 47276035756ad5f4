"""Exceptions raised by the generators.

The CLI catches :class:`ScaffoldError` at the command boundary, prints the
message and exits non-zero.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every precondition or process failure."""


class ProjectExistsError(ScaffoldError):
    """Raised by ``create`` when the target directory is already taken."""

    def __init__(self, project_name: str, path: Path) -> None:
        self.project_name = project_name
        self.path = path
        super().__init__(f"Directory {project_name} already exists!")


class NotAProjectError(ScaffoldError):
    """Raised by ``add`` when the working directory has no manifest."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__("Please run this command from the root of your Express project.")


class DependencyInstallError(ScaffoldError):
    """Raised when the package manager exits non-zero or cannot be started."""

    def __init__(self, command: list[str], reason: str) -> None:
        self.command = command
        self.reason = reason
        super().__init__(f"Failed to install dependencies ({' '.join(command)}): {reason}")
