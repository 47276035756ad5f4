"""Tests for the ``add`` generator.

Covers:
- Rendering of model, controller and routes
- Naming: verbatim name in paths/URLs, capitalized name only as model identifier
- Entry-point wiring and marker ordering
- Duplicate insertion when the same module is added twice
- Refusal outside a generated project, missing entry point, missing markers
"""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from express_mod.scaffolder.errors import NotAProjectError
from express_mod.scaffolder.module_gen import ModuleGenerator, ModuleResult
from express_mod.scaffolder.names import derive_names
from express_mod.scaffolder.project_gen import IMPORT_MARKER, MIDDLEWARE_MARKER

pytestmark = pytest.mark.unit

IMPORT_LINE = "const usersRoutes = require('./modules/users/users.routes');"
REGISTRATION_LINE = "app.use('/users', usersRoutes);"


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRenderFiles:
    def test_file_paths(self, module_generator: ModuleGenerator):
        assert set(module_generator.render_files("users")) == {
            "src/modules/users/users.model.js",
            "src/modules/users/users.controller.js",
            "src/modules/users/users.routes.js",
        }

    def test_paths_keep_case_as_typed(self, module_generator: ModuleGenerator):
        assert "src/modules/orderItems/orderItems.routes.js" in module_generator.render_files("orderItems")

    def test_model_schema(self, module_generator: ModuleGenerator):
        text = module_generator.render_files("users")["src/modules/users/users.model.js"]
        assert "const usersSchema = new mongoose.Schema({" in text
        assert "required: true" in text
        assert "trim: true" in text
        assert "enum: ['active', 'inactive']" in text
        assert "default: 'active'" in text
        assert "timestamps: true" in text
        assert "collection: 'users'" in text
        assert "const Users = mongoose.model('Users', usersSchema);" in text
        assert "module.exports = Users;" in text

    def test_controller_handlers(self, module_generator: ModuleGenerator):
        text = module_generator.render_files("users")["src/modules/users/users.controller.js"]
        for handler in ("getAll", "getById", "create", "update", "remove"):
            assert f"async function {handler}(req, res, next)" in text
        assert "const Users = require('./users.model');" in text
        assert ".sort({ createdAt: -1 })" in text
        assert "res.status(201)" in text
        assert "runValidators: true" in text

    def test_controller_forwards_failures(self, module_generator: ModuleGenerator):
        text = module_generator.render_files("users")["src/modules/users/users.controller.js"]
        catch_blocks = re.findall(r"catch \(error\) \{\s*(.*?)\s*\}", text)
        assert len(catch_blocks) == 5
        assert all(block == "next(error);" for block in catch_blocks)

    def test_controller_not_found_is_inline_404(self, module_generator: ModuleGenerator):
        text = module_generator.render_files("users")["src/modules/users/users.controller.js"]
        not_found_branches = re.findall(r"if \(!\w+\) \{\s*return res\.status\((\d+)\)\.json\(", text)
        assert not_found_branches == ["404", "404", "404"]
        assert "message: 'users not found'" in text

    def test_routes_bind_five_endpoints(self, module_generator: ModuleGenerator):
        text = module_generator.render_files("users")["src/modules/users/users.routes.js"]
        assert "router.get('/', usersController.getAll);" in text
        assert "router.get('/:id', usersController.getById);" in text
        assert "router.post('/', usersController.create);" in text
        assert "router.patch('/:id', usersController.update);" in text
        assert "router.delete('/:id', usersController.remove);" in text
        assert "require('./users.controller')" in text

    def test_capitalized_name_only_as_model_identifier(self, module_generator: ModuleGenerator):
        files = module_generator.render_files("users")
        assert "Users" not in files["src/modules/users/users.routes.js"]
        model = files["src/modules/users/users.model.js"]
        assert re.findall(r"'(\w*[Uu]sers)'", model) == ["users", "Users"]

    def test_entry_lines(self, module_generator: ModuleGenerator):
        assert module_generator.render_entry_lines(derive_names("users")) == (
            IMPORT_LINE,
            REGISTRATION_LINE,
        )


# ---------------------------------------------------------------------------
# add()
# ---------------------------------------------------------------------------


class TestAdd:
    async def test_writes_three_files(self, module_generator, generated_project: Path):
        result = await module_generator.add("users", generated_project)

        module_dir = generated_project / "src" / "modules" / "users"
        assert sorted(p.name for p in module_dir.iterdir()) == [
            "users.controller.js",
            "users.model.js",
            "users.routes.js",
        ]
        assert isinstance(result, ModuleResult)
        assert result.name == "users"
        assert sorted(result.files) == sorted(module_dir.iterdir())

    async def test_wires_entry_point_in_order(self, module_generator, generated_project, entry_point_text):
        result = await module_generator.add("users", generated_project)

        text = entry_point_text(generated_project)
        assert f"{IMPORT_MARKER}\n{IMPORT_LINE}\n" in text
        assert f"{MIDDLEWARE_MARKER}\n{REGISTRATION_LINE}\n" in text
        assert (
            text.index(IMPORT_MARKER)
            < text.index(IMPORT_LINE)
            < text.index(MIDDLEWARE_MARKER)
            < text.index(REGISTRATION_LINE)
        )
        assert result.fully_wired
        assert result.markers_found == {IMPORT_MARKER: True, MIDDLEWARE_MARKER: True}

    async def test_markers_survive_for_next_add(self, module_generator, generated_project, entry_point_text):
        await module_generator.add("users", generated_project)
        await module_generator.add("products", generated_project)

        text = entry_point_text(generated_project)
        assert text.count(IMPORT_MARKER) == 1
        assert text.count(MIDDLEWARE_MARKER) == 1
        assert "app.use('/users', usersRoutes);" in text
        assert "app.use('/products', productsRoutes);" in text

    async def test_entry_lines_keep_name_verbatim(self, module_generator, generated_project, entry_point_text):
        await module_generator.add("r&d", generated_project)

        text = entry_point_text(generated_project)
        assert "const r&dRoutes = require('./modules/r&d/r&d.routes');" in text
        assert "app.use('/r&d', r&dRoutes);" in text
        assert "&amp;" not in text
        assert (generated_project / "src/modules/r&d/r&d.routes.js").is_file()

    async def test_adding_twice_duplicates_entry_lines(self, module_generator, generated_project, entry_point_text):
        await module_generator.add("users", generated_project)
        first_model = (generated_project / "src/modules/users/users.model.js").read_text(encoding="utf-8")

        await module_generator.add("users", generated_project)

        text = entry_point_text(generated_project)
        assert text.count(IMPORT_LINE) == 2
        assert text.count(REGISTRATION_LINE) == 2
        second_model = (generated_project / "src/modules/users/users.model.js").read_text(encoding="utf-8")
        assert second_model == first_model

    async def test_not_a_project_writes_nothing(self, module_generator, tmp_path: Path):
        with pytest.raises(NotAProjectError):
            await module_generator.add("users", tmp_path)
        assert list(tmp_path.iterdir()) == []

    async def test_defaults_to_working_directory(self, module_generator, generated_project, monkeypatch):
        monkeypatch.chdir(generated_project)
        await module_generator.add("users")
        assert (generated_project / "src/modules/users/users.routes.js").is_file()

    async def test_missing_entry_point_raises_after_module_files(self, module_generator, tmp_path: Path):
        (tmp_path / "package.json").write_text("{}", encoding="utf-8")

        with pytest.raises(FileNotFoundError):
            await module_generator.add("users", tmp_path)

        assert (tmp_path / "src/modules/users/users.model.js").is_file()

    async def test_missing_markers_warn_and_leave_file_unchanged(
        self, module_generator, generated_project, capsys
    ):
        entry_point = generated_project / "src" / "index.js"
        entry_point.write_text("const app = express();\n", encoding="utf-8")

        result = await module_generator.add("users", generated_project)

        assert entry_point.read_text(encoding="utf-8") == "const app = express();\n"
        assert result.markers_found == {IMPORT_MARKER: False, MIDDLEWARE_MARKER: False}
        assert not result.fully_wired
        assert "not found" in capsys.readouterr().out

    async def test_empty_name_rejected(self, module_generator, generated_project):
        with pytest.raises(ValueError):
            await module_generator.add("", generated_project)
