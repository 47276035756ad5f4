"""express-mod -- scaffolds modular Express.js + Mongoose backends.

Two commands are exposed through :mod:`express_mod.cli`:

* ``create <project-name>`` renders a new project tree and installs its
  dependencies with the configured package manager.
* ``add <module-name>`` writes a model/controller/routes triplet into an
  existing project and wires it into ``src/index.js``.
"""

__version__ = "1.0.0"
