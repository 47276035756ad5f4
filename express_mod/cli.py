"""express-mod command-line entry point.

Usage::

    express-mod create my-app
    express-mod add users
    python -m express_mod --version
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import NoReturn

from rich.panel import Panel
from rich.text import Text

from express_mod import __version__
from express_mod.config import Config
from express_mod.scaffolder import ModuleGenerator, ProjectGenerator, ScaffoldError
from express_mod.utils import (
    console,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
)

PROG = "express-mod"

USAGE = f"""\
Usage: {PROG} <command> <name>

Commands:
  create <project-name>   Create a new Express project with modular architecture
  add <module-name>       Add a new module to the current project

Examples:
  {PROG} create my-app      # Create a new project called 'my-app'
  {PROG} add users          # Add a 'users' module to current project

Options:
  -h, --help             Show this help message
  -v, --version          Show version number
  --skip-install         Do not run the package manager after create
"""


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors exit with status 1."""

    def error(self, message: str) -> NoReturn:
        print_error(f"Error: {message}")
        show_help()
        sys.exit(1)


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog=PROG, add_help=False)
    parser.add_argument("-h", "--help", action="store_true", dest="show_help")
    parser.add_argument("-v", "--version", action="store_true", dest="show_version")
    parser.add_argument("--skip-install", action="store_true")
    parser.add_argument("command", nargs="?")
    parser.add_argument("name", nargs="?")
    parser.add_argument("extra", nargs="*", help=argparse.SUPPRESS)
    return parser


def show_help() -> None:
    """Print the static usage text."""
    console.print(USAGE, markup=False, highlight=False)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def create_project(name: str, config: Config, cwd: Path) -> int:
    """Run ``create`` and report the outcome.  Returns the exit status."""
    generator = ProjectGenerator(config)
    try:
        asyncio.run(generator.generate(name, cwd))
    except ScaffoldError as exc:
        print_error(str(exc))
        return 1
    except OSError as exc:
        print_error(f"Failed to create project: {exc}")
        return 1

    print_success(f'Express project "{name}" created successfully!')
    steps = [f"cd {name}"]
    if not config.install_dependencies:
        steps.append("npm install")
    steps.append("npm run dev")
    body = (
        "To get started:\n"
        + "\n".join(f"  {step}" for step in steps)
        + "\n\nConfiguration (.env):\n"
        f"  MONGODB_URI={config.mongodb_uri}\n"
        f"  DB_NAME={config.db_name(name)}\n"
        f"  PORT={config.default_port}\n"
        f"\nTo add new modules:\n  {PROG} add <module-name>"
    )
    console.print(Panel(Text(body), title="Next steps", expand=False))
    return 0


def add_module(name: str, config: Config, cwd: Path) -> int:
    """Run ``add`` and report the outcome.  Returns the exit status."""
    generator = ModuleGenerator(config)
    try:
        result = asyncio.run(generator.add(name, cwd))
    except ScaffoldError as exc:
        print_error(str(exc))
        return 1
    except OSError as exc:
        print_error(f"Failed to create module: {exc}")
        return 1

    if result.fully_wired:
        print_success(f'Module "{name}" added successfully!')
    else:
        print_warning(f'Module "{name}" files written, but {config.entry_point} was not fully updated.')
    print_summary_table(
        [
            ("GET", f"/{name}"),
            ("GET", f"/{name}/:id"),
            ("POST", f"/{name}"),
            ("PATCH", f"/{name}/:id"),
            ("DELETE", f"/{name}/:id"),
        ],
        title="Available API Endpoints",
        headers=("Method", "Path"),
    )
    print_summary_table(
        [(path.name, str(path.relative_to(cwd))) for path in result.files],
        title="Generated Files",
        headers=("File", "Location"),
    )
    return 0


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def dispatch(argv: list[str], config: Config | None = None, cwd: Path | None = None) -> int:
    """Parse *argv* and run the matching command.  Returns the exit status."""
    args = _build_parser().parse_intermixed_args(argv)

    if args.show_help:
        show_help()
        return 0
    if args.show_version:
        console.print(__version__, highlight=False)
        return 0

    if not args.command:
        print_error("Please provide a command (e.g., create or add).")
        show_help()
        return 1

    if config is None:
        try:
            config = Config.from_env()
        except ValueError as exc:
            print_error(f"Invalid configuration: {exc}")
            return 1
    if args.skip_install:
        config = config.model_copy(update={"install_dependencies": False})
    cwd = cwd or Path.cwd()

    print_info(f"Command: {args.command}")
    if args.name:
        print_info(f"Name: {args.name}")

    if args.command == "create":
        if not args.name:
            print_error("Please provide a project name.")
            return 1
        return create_project(args.name, config, cwd)

    if args.command == "add":
        if not args.name:
            print_error("Please provide a module name.")
            return 1
        return add_module(args.name, config, cwd)

    print_error(f'Unknown command: {args.command}. Use "create" or "add".')
    show_help()
    return 1


def main() -> None:
    """CLI entry point for ``express-mod`` and ``python -m express_mod``."""
    sys.exit(dispatch(sys.argv[1:]))


if __name__ == "__main__":
    main()
