"""Implementation of the 'plan' command.

The plan command reports which modules need a release and the tag each
release would get. Nothing is created or pushed.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from rich.table import Table

from monorelease.cli.commands.common import load_project, parse_project

if TYPE_CHECKING:
    from rich.console import Console


def run_plan(
    path: str | None,
    history: str | None,
    since: str | None,
    as_json: bool,
    show_all: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the plan command.

    Args:
        path: Optional path to the workspace
        history: Optional JSON history file
        since: Only consider commits after this git revision
        as_json: Print machine-readable output
        show_all: Include modules that do not need a release
        console: Console for standard output
        err_console: Console for error output
    """
    project = load_project(path, history, since, err_console)
    modules = parse_project(project, err_console)
    selected = modules if show_all else [m for m in modules if m.needs_release()]

    if as_json:
        console.print_json(json.dumps([module.to_dict() for module in selected]))
        return

    if not selected:
        console.print("[yellow]No modules need a release.[/]")
        return

    table = Table(title="Release plan")
    table.add_column("Module", style="cyan")
    table.add_column("Reasons")
    table.add_column("Type")
    table.add_column("Latest tag", style="dim")
    table.add_column("Next tag", style="green")

    for module in selected:
        release_type = module.release_type()
        table.add_row(
            module.name,
            ", ".join(str(reason) for reason in module.release_reasons()) or "-",
            str(release_type) if release_type else "-",
            module.latest_tag.name if module.latest_tag else "-",
            module.next_tag() or "-",
        )

    console.print(table)
    pending = sum(1 for module in modules if module.needs_release())
    console.print(
        f"\n[bold]{pending}[/] of [bold]{len(modules)}[/] module"
        f"{'' if len(modules) == 1 else 's'} need a release."
    )
