"""Module directory discovery and glob matching.

A directory is a module when it directly contains at least one file
matching a module-definition pattern (``*.tf`` by default). Modules may be
nested inside other modules; both are discovered.

Glob patterns use gitignore semantics via :mod:`pathspec`: a pattern
without a slash (``*.md``) matches at any depth, ``tests/**`` matches
everything below ``tests``. Ignore patterns are anchored to the workspace
root instead, so ``examples`` ignores only the top-level ``examples``
directory.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import pathspec

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

# Never descended into.
SKIPPED_DIRECTORIES = frozenset({".git", ".terraform"})


def _anchor(pattern: str) -> str:
    return pattern if pattern.startswith("/") else f"/{pattern}"


class PatternMatcher:
    """Match relative paths against a list of glob patterns.

    Each pattern is compiled on its own so the pattern responsible for a
    match can be reported. With ``anchored`` every pattern is matched from
    the root, as if written with a leading ``/``.
    """

    def __init__(self, patterns: Iterable[str], anchored: bool = False) -> None:
        self._specs = []
        for pattern in patterns:
            line = _anchor(pattern) if anchored else pattern
            self._specs.append((pattern, pathspec.GitIgnoreSpec.from_lines([line])))

    def match(self, relative_path: str) -> str | None:
        """Return the first pattern matching ``relative_path``, or None."""
        for pattern, spec in self._specs:
            if spec.match_file(relative_path):
                return pattern
        return None


@dataclass
class DiscoveryResult:
    """Outcome of a workspace walk.

    Attributes:
        module_directories: Module directories relative to the workspace,
            in walk order (sorted)
        ignored_directories: Roots of subtrees pruned by ignore patterns
    """

    workspace_dir: Path
    module_directories: list[str] = field(default_factory=list)
    ignored_directories: list[str] = field(default_factory=list)


def is_module_directory(directory: Path, definition_patterns: PatternMatcher) -> bool:
    """Whether ``directory`` directly contains a module-definition file."""
    try:
        entries = list(os.scandir(directory))
    except FileNotFoundError:
        return False
    return any(entry.is_file() and definition_patterns.match(entry.name) for entry in entries)


def find_module_directories(
    workspace_dir: Path,
    definition_patterns: Iterable[str],
    path_ignore: Iterable[str] = (),
    max_depth: int | None = None,
) -> DiscoveryResult:
    """Walk ``workspace_dir`` and collect module directories.

    Entries are visited in sorted order so results do not depend on
    filesystem iteration order.

    Args:
        workspace_dir: Root of the repository checkout
        definition_patterns: File name globs identifying a module directory
        path_ignore: Globs (relative to the workspace) whose subtrees are skipped
        max_depth: Maximum directory depth below the workspace to visit
    """
    workspace_dir = workspace_dir.resolve()
    definitions = PatternMatcher(definition_patterns)
    ignore = PatternMatcher(path_ignore, anchored=True)
    result = DiscoveryResult(workspace_dir=workspace_dir)

    def search(directory: Path, depth: int) -> None:
        if max_depth is not None and depth > max_depth:
            return
        children = sorted(
            (entry for entry in os.scandir(directory) if entry.is_dir(follow_symlinks=False)),
            key=lambda entry: entry.name,
        )
        for entry in children:
            if entry.name in SKIPPED_DIRECTORIES:
                continue

            child = Path(entry.path)
            relative = child.relative_to(workspace_dir).as_posix()

            matched = ignore.match(relative)
            if matched is not None:
                logger.info("Skipping '%s' due to module path ignore match: %r", relative, matched)
                result.ignored_directories.append(relative)
                continue

            if is_module_directory(child, definitions):
                result.module_directories.append(relative)

            search(child, depth + 1)

    search(workspace_dir, 1)
    return result


def enclosing_directory(file_path: str, directories: Iterable[str]) -> str | None:
    """Return the deepest directory in ``directories`` that contains ``file_path``.

    Matching is purely by path prefix; the filesystem is not consulted.
    """
    best: str | None = None
    for directory in directories:
        if file_path.startswith(directory + "/") and (best is None or len(directory) > len(best)):
            best = directory
    return best
