"""Shared utility functions for express-mod.

Provides async command execution, the file-system primitives the generators
build on (writer, existence checks, marker patcher), and Rich-based console
reporting.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(cmd: list[str], cwd: str | Path | None = None) -> int:
    """Run a command asynchronously and wait for it to finish.

    The child inherits the parent's stdout/stderr, so the user sees its
    output live.  There is no timeout.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.

    Returns:
        The process return code.

    Raises:
        FileNotFoundError: If the program cannot be found.
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        cwd=str(cwd) if cwd else None,
    )
    return await process.wait()


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def write_file(path: str | Path, content: str) -> Path:
    """Create parent directories and write *content* to *path*.

    Leading and trailing whitespace is stripped and exactly one trailing
    newline is appended.  An existing file is overwritten.

    Returns:
        The written ``Path``.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content.strip() + "\n", encoding="utf-8")
    return file_path


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist."""
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def directory_exists(path: str | Path) -> bool:
    """Return ``True`` if anything already occupies *path*."""
    return Path(path).exists()


def is_project_root(path: str | Path, manifest_file: str = "package.json") -> bool:
    """Return ``True`` if *path* holds a dependency manifest.

    Only the manifest's presence is checked; its contents are not parsed.
    """
    return (Path(path) / manifest_file).is_file()


def insert_after_marker(path: str | Path, marker: str, text: str) -> bool:
    """Insert *text* on a new line right after the first *marker* in *path*.

    The file is always rewritten.  When the marker is absent the content is
    written back unchanged and ``False`` is returned.

    Raises:
        FileNotFoundError: If *path* does not exist.
    """
    file_path = Path(path)
    content = file_path.read_text(encoding="utf-8")
    found = marker in content
    content = content.replace(marker, f"{marker}\n{text}", 1)
    file_path.write_text(content, encoding="utf-8")
    return found


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(
    rows: list[tuple[str, str]],
    title: str = "Summary",
    headers: tuple[str, str] = ("Item", "Value"),
) -> None:
    """Print a two-column table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column(headers[0], style="dim", no_wrap=True)
    table.add_column(headers[1])

    for left, right in rows:
        table.add_row(left, right)

    console.print(table)


def print_info(message: str) -> None:
    """Print a dimmed progress message."""
    console.print(f"[dim]{escape(message)}[/dim]", highlight=False)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]", highlight=False)


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]", highlight=False)


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]", highlight=False)
