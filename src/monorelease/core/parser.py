"""Build module records from a workspace and commit history.

Parsing runs in phases:

1. Discover module directories in the workspace.
2. Create one :class:`ModuleRecord` per directory.
3. Associate each commit with every module it effectively changed.
4. Assign each module its slice of the historical tags and releases.

Commits are walked once and pushed into the records, rather than having
each record scan the whole history.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from monorelease.core.discovery import (
    DiscoveryResult,
    PatternMatcher,
    enclosing_directory,
    find_module_directories,
)
from monorelease.core.module import ModuleRecord
from monorelease.core.naming import releases_for_module, tags_for_module

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from monorelease.config.models import MonoreleaseConfig
    from monorelease.core.records import Commit, Release, Tag

logger = logging.getLogger(__name__)


class ModuleParser:
    """Maps commits onto the modules discovered in one workspace walk."""

    def __init__(self, discovery: DiscoveryResult, config: MonoreleaseConfig) -> None:
        self._exclude = PatternMatcher(config.modules.change_exclude_patterns)
        self._modules: dict[str, ModuleRecord] = {}
        workspace_dir = discovery.workspace_dir
        for relative in discovery.module_directories:
            self._modules[relative] = ModuleRecord(workspace_dir / relative, workspace_dir, config)
        # Ignored roots take part in the nearest-directory lookup so files in
        # an ignored nested module are not credited to its parent.
        self._known_directories = [*discovery.module_directories, *discovery.ignored_directories]

    @property
    def modules(self) -> list[ModuleRecord]:
        """Module records sorted by name."""
        return sorted(self._modules.values(), key=lambda module: module.name)

    def associate(self, commits: Iterable[Commit]) -> None:
        """Attach each commit to every module with a non-excluded changed file."""
        for commit in commits:
            logger.info(
                "Parsing commit %s: %s (Changed Files = %d)",
                commit.sha,
                commit.subject,
                len(commit.files),
            )
            touched: dict[str, ModuleRecord] = {}

            for file_path in commit.files:
                directory = enclosing_directory(file_path, self._known_directories)
                if directory is None:
                    logger.info("Skipping file '%s': no associated module", file_path)
                    continue

                module = self._modules.get(directory)
                if module is None:
                    logger.info(
                        "Skipping file '%s': module path '%s' is ignored", file_path, directory
                    )
                    continue

                relative_file = file_path[len(directory) + 1 :]
                matched = self._exclude.match(relative_file)
                if matched is not None:
                    logger.info(
                        "Skipping file '%s': excluded by change exclude pattern %r",
                        file_path,
                        matched,
                    )
                    continue

                logger.info("Found changed file '%s' in module '%s'", file_path, module.name)
                touched[directory] = module

            for module in touched.values():
                module.add_commit(commit)

    def assign_history(self, tags: Iterable[Tag], releases: Iterable[Release]) -> None:
        """Give each module the tags and releases associated with its name."""
        all_tags = list(tags)
        all_releases = list(releases)
        for module in self._modules.values():
            module.set_tags(tags_for_module(module.name, all_tags))
            module.set_releases(releases_for_module(module.name, all_releases))


def parse_modules(
    workspace_dir: Path,
    commits: Iterable[Commit],
    config: MonoreleaseConfig,
    tags: Iterable[Tag] = (),
    releases: Iterable[Release] = (),
) -> list[ModuleRecord]:
    """Discover modules, associate commits and assign history.

    Returns:
        Module records sorted alphabetically by name

    Raises:
        TagValidationError: If historical tags are malformed
        ReleaseValidationError: If historical releases are malformed
    """
    modules_config = config.modules
    logger.info("Searching for modules in %s", workspace_dir)
    discovery = find_module_directories(
        workspace_dir,
        modules_config.definition_patterns,
        modules_config.path_ignore,
        modules_config.max_depth,
    )
    count = len(discovery.module_directories)
    logger.info("Found %d module %s", count, "directory" if count == 1 else "directories")
    logger.debug("Module directories: %s", discovery.module_directories)

    parser = ModuleParser(discovery, config)
    parser.associate(commits)
    parser.assign_history(tags, releases)

    modules = parser.modules
    for module in modules:
        logger.debug("%r", module)
    return modules
