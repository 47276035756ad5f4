"""Project scaffolding for the ``create`` command.

Renders the Express.js + Mongoose skeleton (manifest, entry point, database
module, error handler, ``.env``, ``.gitignore``) into ``<cwd>/<project-name>``
and then installs dependencies with the configured package manager.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from express_mod.config import Config
from express_mod.utils import directory_exists, ensure_dir, print_info, run_command, write_file

from .errors import DependencyInstallError, ProjectExistsError
from .names import derive_names
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Entry-point markers
# ---------------------------------------------------------------------------

IMPORT_MARKER = "// ROUTE_IMPORTS"
MIDDLEWARE_MARKER = "// ROUTE_MIDDLEWARE"


# ---------------------------------------------------------------------------
# Dependency manifest
# ---------------------------------------------------------------------------

RUNTIME_DEPENDENCIES: dict[str, str] = {
    "express": "^5.1.0",
    "mongoose": "^8.7.0",
    "dotenv": "^17.2.3",
    "cors": "^2.8.5",
    "helmet": "^8.1.0",
}

DEV_DEPENDENCIES: dict[str, str] = {
    "nodemon": "^3.1.10",
}


def build_package_manifest(project_name: str) -> dict[str, Any]:
    """Return the ``package.json`` payload for *project_name*."""
    return {
        "name": project_name,
        "version": "1.0.0",
        "description": "Express application with MVC architecture",
        "main": "src/index.js",
        "scripts": {
            "start": "node src/index.js",
            "dev": "nodemon src/index.js",
        },
        "dependencies": dict(RUNTIME_DEPENDENCIES),
        "devDependencies": dict(DEV_DEPENDENCIES),
    }


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Scaffolds a new project directory.

    The generated tree is::

        <project>/
            package.json
            .env
            .gitignore
            src/
                index.js
                config/db.js
                middleware/errorHandler.js
                modules/
    """

    # Template name -> path relative to the project root
    _PROJECT_FILES: dict[str, str] = {
        "project/src/index.js.j2": "src/index.js",
        "project/src/config/db.js.j2": "src/config/db.js",
        "project/src/middleware/errorHandler.js.j2": "src/middleware/errorHandler.js",
        "project/env.j2": ".env",
        "project/gitignore.j2": ".gitignore",
    }

    def __init__(self, config: Config | None = None, renderer: TemplateRenderer | None = None) -> None:
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def render_files(self, project_name: str) -> dict[str, str]:
        """Render every project file without touching the disk.

        Returns:
            Mapping of project-relative path to file content.
        """
        context = self._build_context(project_name)
        files = {
            self.config.manifest_file: json.dumps(build_package_manifest(project_name), indent=2),
        }
        for template_name, output_name in self._PROJECT_FILES.items():
            files[output_name] = self.renderer.render(template_name, context)
        return files

    async def generate(self, project_name: str, cwd: str | Path | None = None) -> Path:
        """Create the project under *cwd* and install its dependencies.

        Args:
            project_name: Directory name and ``package.json`` name.
            cwd: Parent directory.  Defaults to the process working directory.

        Returns:
            Path to the generated project root.

        Raises:
            ValueError: If *project_name* is empty.
            ProjectExistsError: If ``cwd / project_name`` already exists.
            DependencyInstallError: If the package manager fails.  Files that
                were already written are left in place.
            OSError: If a directory or file cannot be written.
        """
        names = derive_names(project_name)
        parent = Path(cwd) if cwd is not None else Path.cwd()
        project_root = parent / names.raw

        if directory_exists(project_root):
            raise ProjectExistsError(project_name, project_root)

        print_info(f"Creating a new Express project in {project_root}")

        files = self.render_files(project_name)
        for relative_path, content in files.items():
            await asyncio.to_thread(write_file, project_root / relative_path, content)
        await asyncio.to_thread(ensure_dir, project_root / "src" / "modules")

        if self.config.install_dependencies:
            await self._install_dependencies(project_root)

        return project_root

    # -- Context building --------------------------------------------------

    def _build_context(self, project_name: str) -> dict[str, Any]:
        """Build the Jinja2 template context for the project templates."""
        names = derive_names(project_name)
        return {
            "project_name": names.raw,
            "db_name": self.config.db_name(names.raw),
            "port": self.config.default_port,
            "mongodb_uri": self.config.mongodb_uri,
            "api_version": self.config.api_version,
            "import_marker": IMPORT_MARKER,
            "middleware_marker": MIDDLEWARE_MARKER,
        }

    # -- Dependency installation -------------------------------------------

    async def _install_dependencies(self, project_root: Path) -> None:
        """Run the package manager in *project_root*, inheriting the terminal."""
        command = self.config.install_command
        print_info("Installing dependencies...")
        try:
            returncode = await run_command(command, cwd=project_root)
        except OSError as exc:
            raise DependencyInstallError(command, str(exc)) from exc
        if returncode != 0:
            raise DependencyInstallError(command, f"exit status {returncode}")
