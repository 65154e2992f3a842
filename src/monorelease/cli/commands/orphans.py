"""Implementation of the 'orphans' command.

Lists tags and releases that no longer belong to any module. Deleting them
is left to the hosting collaborator.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from rich.panel import Panel

from monorelease.cli.commands.common import load_project, parse_project
from monorelease.core.orphans import releases_to_delete, tags_to_delete

if TYPE_CHECKING:
    from rich.console import Console


def run_orphans(
    path: str | None,
    history: str | None,
    as_json: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the orphans command.

    Args:
        path: Optional path to the workspace
        history: Optional JSON history file
        as_json: Print machine-readable output
        console: Console for standard output
        err_console: Console for error output
    """
    project = load_project(path, history, None, err_console)

    if not project.config.delete_legacy_tags:
        if as_json:
            console.print_json(json.dumps({"tags": [], "releases": []}))
        else:
            console.print(
                "[yellow]Legacy tag deletion is disabled "
                "([cyan]delete_legacy_tags = false[/]). Nothing to report.[/]"
            )
        return

    modules = parse_project(project, err_console)
    tags = tags_to_delete(project.tags, modules)
    releases = releases_to_delete(project.releases, modules)

    if as_json:
        console.print_json(
            json.dumps({"tags": tags, "releases": [release.to_dict() for release in releases]})
        )
        return

    if not tags and not releases:
        console.print("[green]No orphaned tags or releases.[/]")
        return

    lines = [f"  • tag [cyan]{tag}[/]" for tag in tags]
    lines += [f"  • release [cyan]{release.title}[/] (id {release.id})" for release in releases]
    console.print(
        Panel(
            "\n".join(lines),
            title=f"[yellow]{len(tags)} orphaned tag(s), {len(releases)} orphaned release(s)[/]",
            border_style="yellow",
        )
    )
