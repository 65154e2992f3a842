"""Helpers shared by CLI commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from monorelease.config import load_config
from monorelease.core.discovery import enclosing_directory
from monorelease.core.parser import parse_modules
from monorelease.core.records import Commit
from monorelease.exceptions import MonoreleaseError
from monorelease.vcs import GitRepository, load_history

if TYPE_CHECKING:
    from rich.console import Console

    from monorelease.config.models import MonoreleaseConfig
    from monorelease.core.module import ModuleRecord
    from monorelease.core.records import Release, Tag

logger = logging.getLogger(__name__)


@dataclass
class Project:
    """Everything a command needs after loading inputs.

    When ``repo`` is set, commits were read from git without an explicit
    ``--since`` and are scoped per module to those after its latest tag.
    """

    workspace_dir: Path
    config: MonoreleaseConfig
    commits: list[Commit]
    tags: list[Tag]
    releases: list[Release]
    repo: GitRepository | None = None

    def parse(self) -> list[ModuleRecord]:
        commits = self.commits
        if self.repo is not None:
            commits = unreleased_commits(self, self.repo)
        return parse_modules(self.workspace_dir, commits, self.config, self.tags, self.releases)


def unreleased_commits(project: Project, repo: GitRepository) -> list[Commit]:
    """Drop each changed file from commits already contained in its module's latest tag.

    A tag without a commit sha leaves its module's commits untouched.
    """
    modules = parse_modules(
        project.workspace_dir, [], project.config, project.tags, project.releases
    )

    ancestors: dict[str, set[str]] = {}
    released: dict[str, set[str]] = {}
    for module in modules:
        tag = module.latest_tag
        if tag is None or not tag.commit_sha:
            continue
        if tag.commit_sha not in ancestors:
            ancestors[tag.commit_sha] = repo.list_ancestors(tag.commit_sha)
        released[module.relative_path] = ancestors[tag.commit_sha]

    if not released:
        return project.commits

    directories = [module.relative_path for module in modules]
    scoped: list[Commit] = []
    for commit in project.commits:
        files = []
        for file_path in commit.files:
            directory = enclosing_directory(file_path, directories)
            if directory is not None and commit.sha in released.get(directory, ()):
                logger.debug(
                    "Skipping file '%s' in %s: already released by the latest tag",
                    file_path,
                    commit.sha,
                )
                continue
            files.append(file_path)
        scoped.append(Commit(sha=commit.sha, message=commit.message, files=tuple(files)))
    return scoped


def load_project(
    path: str | None,
    history_path: str | None,
    since: str | None,
    err_console: Console,
) -> Project:
    """Load configuration and history, exiting with status 1 on failure.

    Sections present in the history file win; anything missing is read from
    the local git repository. Releases default to none. Whenever git is read,
    the repository top level is the workspace root, since git reports
    changed files relative to it.
    """
    workspace_dir = (Path(path) if path else Path.cwd()).resolve()

    try:
        config = load_config(workspace_dir)
    except MonoreleaseError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    repo: GitRepository | None = None
    try:
        history = load_history(Path(history_path)) if history_path else None
        commits = history.commits if history else None
        tags = history.tags if history else None
        releases = history.releases if history else None

        if commits is None or tags is None:
            git_repo = GitRepository(workspace_dir)
            workspace_dir = git_repo.path.resolve()
            if commits is None:
                commits = git_repo.list_commits(since=since)
                if since is None:
                    repo = git_repo
            if tags is None:
                tags = git_repo.list_tags()
    except MonoreleaseError as e:
        err_console.print(f"[red]Error reading history:[/] {e}")
        raise SystemExit(1) from e

    return Project(
        workspace_dir=workspace_dir,
        config=config,
        commits=commits,
        tags=tags,
        releases=releases or [],
        repo=repo,
    )


def parse_project(project: Project, err_console: Console) -> list[ModuleRecord]:
    """Run the engine, exiting with status 1 on invalid history."""
    try:
        return project.parse()
    except MonoreleaseError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e
