"""express-mod configuration.

Typed settings for the scaffolder. Every value only shapes what gets
*generated* (default port, connection URI, the package manager invoked after
``create``); the generated server reads its own ``.env`` at run time.
"""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Global express-mod configuration.

    Instances are created once by the CLI entry point (usually through
    :meth:`from_env`) and passed to the generators.
    """

    install_command: list[str] = Field(
        default_factory=lambda: ["npm", "install"],
        min_length=1,
        description="Package manager invocation run inside a new project",
    )
    install_dependencies: bool = Field(
        default=True, description="Run the install command after create"
    )
    default_port: int = Field(default=5000, ge=1, le=65535)
    mongodb_uri: str = Field(default="mongodb://localhost:27017")
    db_name_suffix: str = Field(default="_db")
    api_version: str = Field(default="v1")

    # Files that identify a generated project.
    manifest_file: str = Field(default="package.json")
    entry_point: str = Field(default="src/index.js")

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def entry_point_path(self, project_root: Path) -> Path:
        """Path to the generated entry point inside *project_root*."""
        return Path(project_root) / self.entry_point

    def db_name(self, project_name: str) -> str:
        """Default database name written to the generated ``.env``."""
        return f"{project_name}{self.db_name_suffix}"

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            EXPRESS_MOD_INSTALL_COMMAND, EXPRESS_MOD_SKIP_INSTALL,
            EXPRESS_MOD_DEFAULT_PORT, EXPRESS_MOD_MONGODB_URI.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("EXPRESS_MOD_INSTALL_COMMAND"):
            kwargs["install_command"] = shlex.split(os.environ["EXPRESS_MOD_INSTALL_COMMAND"])
        if os.environ.get("EXPRESS_MOD_SKIP_INSTALL"):
            skip = os.environ["EXPRESS_MOD_SKIP_INSTALL"].strip().lower() in _TRUTHY
            kwargs["install_dependencies"] = not skip
        if os.environ.get("EXPRESS_MOD_DEFAULT_PORT"):
            kwargs["default_port"] = int(os.environ["EXPRESS_MOD_DEFAULT_PORT"])
        if os.environ.get("EXPRESS_MOD_MONGODB_URI"):
            kwargs["mongodb_uri"] = os.environ["EXPRESS_MOD_MONGODB_URI"]
        return cls(**kwargs)
