"""express-mod scaffolder -- renders projects and modules.

Quick usage::

    from express_mod.scaffolder import ModuleGenerator, ProjectGenerator

    project_root = await ProjectGenerator().generate("my-app", cwd="/tmp")
    await ModuleGenerator().add("users", project_root)
"""

from express_mod.scaffolder.errors import (
    DependencyInstallError,
    NotAProjectError,
    ProjectExistsError,
    ScaffoldError,
)
from express_mod.scaffolder.module_gen import ModuleGenerator, ModuleResult
from express_mod.scaffolder.names import ResourceNames, derive_names
from express_mod.scaffolder.project_gen import ProjectGenerator, build_package_manifest
from express_mod.scaffolder.templates import TemplateRenderer

__all__ = [
    "DependencyInstallError",
    "ModuleGenerator",
    "ModuleResult",
    "NotAProjectError",
    "ProjectExistsError",
    "ProjectGenerator",
    "ResourceNames",
    "ScaffoldError",
    "TemplateRenderer",
    "build_package_manifest",
    "derive_names",
]
