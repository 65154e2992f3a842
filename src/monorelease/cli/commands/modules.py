"""Implementation of the 'modules' command."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.table import Table

from monorelease.config import load_config
from monorelease.core.discovery import find_module_directories
from monorelease.core.naming import module_name_from_path
from monorelease.exceptions import MonoreleaseError

if TYPE_CHECKING:
    from rich.console import Console


def run_modules(path: str | None, console: Console, err_console: Console) -> None:
    """List the modules discovered in the workspace."""
    workspace_dir = (Path(path) if path else Path.cwd()).resolve()
    try:
        config = load_config(workspace_dir)
    except MonoreleaseError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    modules_config = config.modules
    discovery = find_module_directories(
        workspace_dir,
        modules_config.definition_patterns,
        modules_config.path_ignore,
        modules_config.max_depth,
    )

    table = Table(title=f"Modules in {workspace_dir}")
    table.add_column("Module", style="cyan")
    table.add_column("Directory", style="dim")
    rows = sorted(
        (module_name_from_path(directory, config.tag_separator), directory)
        for directory in discovery.module_directories
    )
    for name, directory in rows:
        table.add_row(name, directory)

    console.print(table)
    if discovery.ignored_directories:
        console.print(f"[dim]Ignored: {', '.join(discovery.ignored_directories)}[/]")
