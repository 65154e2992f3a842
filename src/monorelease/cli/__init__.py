"""Command-line interface for monorelease."""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from monorelease import __version__
from monorelease.cli.commands.modules import run_modules
from monorelease.cli.commands.orphans import run_orphans
from monorelease.cli.commands.plan import run_plan

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: int) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(__version__, prog_name="monorelease")
@click.option("-v", "--verbose", count=True, help="Increase log output (-v info, -vv debug).")
def main(verbose: int) -> None:
    """Plan semantic-version releases for modules in a monorepo."""
    _configure_logging(verbose)


@main.command()
@click.argument("path", required=False, type=click.Path(exists=True, file_okay=False))
@click.option("--history", type=click.Path(exists=True, dir_okay=False), help="JSON history file.")
@click.option("--since", help="Only consider commits after this git revision.")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table.")
@click.option("--all", "show_all", is_flag=True, help="Include modules without pending releases.")
def plan(
    path: str | None, history: str | None, since: str | None, as_json: bool, show_all: bool
) -> None:
    """Show which modules need a release and their next tags."""
    run_plan(path, history, since, as_json, show_all, console, err_console)


@main.command()
@click.argument("path", required=False, type=click.Path(exists=True, file_okay=False))
@click.option("--history", type=click.Path(exists=True, dir_okay=False), help="JSON history file.")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a summary.")
def orphans(path: str | None, history: str | None, as_json: bool) -> None:
    """List tags and releases that no longer belong to any module."""
    run_orphans(path, history, as_json, console, err_console)


@main.command()
@click.argument("path", required=False, type=click.Path(exists=True, file_okay=False))
def modules(path: str | None) -> None:
    """List modules discovered in the workspace."""
    run_modules(path, console, err_console)
