"""Shared pytest fixtures for the express-mod test suite.

Provides reusable fixtures for:
- A configuration that never shells out to a package manager
- The real template renderer
- A freshly generated project on disk
- A mocked ``run_command`` for the install step
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from express_mod.config import Config
from express_mod.scaffolder import ModuleGenerator, ProjectGenerator, TemplateRenderer


# ---------------------------------------------------------------------------
# Configuration & renderer
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> Config:
    """Default configuration with dependency installation turned off."""
    return Config(install_dependencies=False)


@pytest.fixture
def renderer() -> TemplateRenderer:
    """The renderer backed by the packaged templates."""
    return TemplateRenderer()


@pytest.fixture
def project_generator(config: Config, renderer: TemplateRenderer) -> ProjectGenerator:
    return ProjectGenerator(config, renderer)


@pytest.fixture
def module_generator(config: Config, renderer: TemplateRenderer) -> ModuleGenerator:
    return ModuleGenerator(config, renderer)


# ---------------------------------------------------------------------------
# Generated project on disk
# ---------------------------------------------------------------------------

@pytest.fixture
async def generated_project(project_generator: ProjectGenerator, tmp_path: Path) -> Path:
    """A project called ``my-app`` created under ``tmp_path``."""
    return await project_generator.generate("my-app", tmp_path)


@pytest.fixture
def entry_point_text():
    """Return a reader for ``src/index.js`` of a project root."""

    def _read(project_root: Path) -> str:
        return (project_root / "src" / "index.js").read_text(encoding="utf-8")

    return _read


# ---------------------------------------------------------------------------
# Subprocess mocking
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_install():
    """Patch the install step's ``run_command`` to succeed without spawning."""
    mock = AsyncMock(return_value=0)
    with patch("express_mod.scaffolder.project_gen.run_command", mock):
        yield mock
