"""Module injection for the ``add`` command.

Writes ``src/modules/<name>/{<name>.model.js, <name>.controller.js,
<name>.routes.js}`` into an existing project and splices the route import and
the route registration into ``src/index.js`` right below its two markers.

Adding the same module twice overwrites the three module files with the same
content and inserts a second copy of both lines into the entry point.
Nothing is de-duplicated.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from pydantic import BaseModel, Field

from express_mod.config import Config
from express_mod.utils import insert_after_marker, is_project_root, print_info, print_warning, write_file

from .errors import NotAProjectError
from .names import ResourceNames, derive_names
from .project_gen import IMPORT_MARKER, MIDDLEWARE_MARKER
from .templates import TemplateRenderer


IMPORT_LINE_TEMPLATE = (
    "const {{ module.raw }}Routes = "
    "require('./modules/{{ module.raw }}/{{ module.raw }}.routes');"
)
REGISTRATION_LINE_TEMPLATE = "app.use('/{{ module.raw }}', {{ module.raw }}Routes);"


class ModuleResult(BaseModel):
    """Outcome of a single ``add`` run."""

    name: str
    files: list[Path] = Field(default_factory=list)
    markers_found: dict[str, bool] = Field(default_factory=dict)

    @property
    def fully_wired(self) -> bool:
        """True when both entry-point insertions landed."""
        return all(self.markers_found.values())


class ModuleGenerator:
    """Adds a model/controller/routes triplet to a generated project."""

    # Template name -> output file suffix
    _MODULE_FILES: dict[str, str] = {
        "module/model.js.j2": "model.js",
        "module/controller.js.j2": "controller.js",
        "module/routes.js.j2": "routes.js",
    }

    def __init__(self, config: Config | None = None, renderer: TemplateRenderer | None = None) -> None:
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()

    # -- Rendering ---------------------------------------------------------

    def render_files(self, module_name: str) -> dict[str, str]:
        """Render the three module files without touching the disk.

        Returns:
            Mapping of project-relative path to file content.
        """
        names = derive_names(module_name)
        context = {"module": names.model_dump()}
        module_dir = f"src/modules/{names.raw}"
        return {
            f"{module_dir}/{names.raw}.{suffix}": self.renderer.render(template_name, context)
            for template_name, suffix in self._MODULE_FILES.items()
        }

    def render_entry_lines(self, names: ResourceNames) -> tuple[str, str]:
        """Return the ``(import, registration)`` lines for the entry point."""
        context = {"module": names.model_dump()}
        return (
            self.renderer.render_string(IMPORT_LINE_TEMPLATE, context),
            self.renderer.render_string(REGISTRATION_LINE_TEMPLATE, context),
        )

    # -- Public API --------------------------------------------------------

    async def add(self, module_name: str, project_root: str | Path | None = None) -> ModuleResult:
        """Write the module files and wire them into the entry point.

        Args:
            module_name: Module name, used as typed for paths and URLs.
            project_root: Root of a generated project.  Defaults to the
                process working directory.

        Raises:
            ValueError: If *module_name* is empty.
            NotAProjectError: If *project_root* has no manifest file.
            OSError: If a file cannot be written, or the entry point is
                missing.
        """
        names = derive_names(module_name)
        root = Path(project_root) if project_root is not None else Path.cwd()

        if not is_project_root(root, self.config.manifest_file):
            raise NotAProjectError(root)

        print_info(f"Adding new module: {names.raw}")

        result = ModuleResult(name=names.raw)
        for relative_path, content in self.render_files(module_name).items():
            path = await asyncio.to_thread(write_file, root / relative_path, content)
            result.files.append(path)

        await self._wire_entry_point(root, names, result)
        return result

    # -- Entry point patching ----------------------------------------------

    async def _wire_entry_point(self, root: Path, names: ResourceNames, result: ModuleResult) -> None:
        """Insert the import line, then the registration line."""
        entry_point = self.config.entry_point_path(root)
        import_line, registration_line = self.render_entry_lines(names)

        for marker, line in ((IMPORT_MARKER, import_line), (MIDDLEWARE_MARKER, registration_line)):
            found = await asyncio.to_thread(insert_after_marker, entry_point, marker, line)
            result.markers_found[marker] = found
            if not found:
                print_warning(
                    f"Marker '{marker}' not found in {self.config.entry_point}; "
                    f"add this line manually: {line}"
                )
