"""Per-module release state.

A :class:`ModuleRecord` is created once per discovered module directory,
receives the commits that touched it during association, and is finalized
when its historical tags and releases are assigned. After that it is only
queried.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from monorelease.core.commits import compute_release_type
from monorelease.core.naming import module_name_from_path
from monorelease.core.version import BumpType, Version, extract_version, next_version
from monorelease.exceptions import (
    ReleaseValidationError,
    TagValidationError,
    VersionFormatError,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from monorelease.config.models import MonoreleaseConfig
    from monorelease.core.records import Commit, Release, Tag

logger = logging.getLogger(__name__)


class ReleaseReason(StrEnum):
    """Why a module needs a release."""

    INITIAL = "initial"
    DIRECT_CHANGES = "direct-changes"


class ModuleRecord:
    """A discovered module with its commits, tags and releases.

    Args:
        directory: Absolute path of the module directory
        workspace_dir: Workspace root the module name is derived from
        config: Run-wide configuration
    """

    def __init__(self, directory: Path, workspace_dir: Path, config: MonoreleaseConfig) -> None:
        self._config = config
        self._directory = Path(directory)
        self._relative_path = self._directory.relative_to(workspace_dir).as_posix()
        self._name = module_name_from_path(self._relative_path, config.tag_separator)
        self._commits: dict[str, Commit] = {}
        self._tags: list[Tag] = []
        self._tag_versions: list[Version] = []
        self._releases: list[Release] = []

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def relative_path(self) -> str:
        """Module directory relative to the workspace, with ``/`` separators."""
        return self._relative_path

    # -------------------------------------------------------------------------
    # Commits
    # -------------------------------------------------------------------------

    def add_commit(self, commit: Commit) -> None:
        """Attach a commit. Adding the same sha twice is a no-op."""
        if commit.sha not in self._commits:
            self._commits[commit.sha] = commit

    @property
    def commits(self) -> list[Commit]:
        return list(self._commits.values())

    @property
    def commit_messages(self) -> list[str]:
        return [commit.message for commit in self._commits.values()]

    @property
    def has_changes(self) -> bool:
        return bool(self._commits)

    # -------------------------------------------------------------------------
    # Tags and releases
    # -------------------------------------------------------------------------

    def set_tags(self, tags: Iterable[Tag]) -> None:
        """Replace this module's tags.

        Tags are sorted newest first by their embedded version.

        Raises:
            TagValidationError: If any tag is not a versioned tag of this module
        """
        versioned: list[tuple[Version, Tag]] = []
        for tag in tags:
            try:
                versioned.append((extract_version(tag.name, self._name), tag))
            except VersionFormatError as e:
                raise TagValidationError(
                    f"Invalid tag {tag.name!r} for module {self._name!r}: {e}"
                ) from e

        versioned.sort(key=lambda item: (item[0], item[1].name), reverse=True)
        self._tag_versions = [version for version, _ in versioned]
        self._tags = [tag for _, tag in versioned]

    def set_releases(self, releases: Iterable[Release]) -> None:
        """Replace this module's releases, sorted newest first by title version.

        Raises:
            ReleaseValidationError: If any release title is not a versioned
                title of this module
        """
        versioned: list[tuple[Version, Release]] = []
        for release in releases:
            try:
                versioned.append((extract_version(release.title, self._name), release))
            except VersionFormatError as e:
                raise ReleaseValidationError(
                    f"Invalid release {release.title!r} for module {self._name!r}: {e}"
                ) from e

        versioned.sort(key=lambda item: (item[0], item[1].title), reverse=True)
        self._releases = [release for _, release in versioned]

    @property
    def tags(self) -> list[Tag]:
        return list(self._tags)

    @property
    def releases(self) -> list[Release]:
        return list(self._releases)

    @property
    def latest_tag(self) -> Tag | None:
        return self._tags[0] if self._tags else None

    @property
    def latest_version(self) -> Version | None:
        return self._tag_versions[0] if self._tag_versions else None

    @property
    def latest_tag_version(self) -> str | None:
        """Version portion of the latest tag, as written (e.g. ``v1.2.3``)."""
        latest = self.latest_version
        return str(latest) if latest is not None else None

    # -------------------------------------------------------------------------
    # Release decisions
    # -------------------------------------------------------------------------

    def is_initial_release(self) -> bool:
        """True if the module has never been tagged."""
        return not self._tags

    def needs_release(self) -> bool:
        return self.is_initial_release() or self.has_changes

    def release_reasons(self) -> list[ReleaseReason]:
        reasons: list[ReleaseReason] = []
        if self.is_initial_release():
            reasons.append(ReleaseReason.INITIAL)
        if self.has_changes:
            reasons.append(ReleaseReason.DIRECT_CHANGES)
        return reasons

    def release_type(self) -> BumpType | None:
        """Release type for this module, or None if no release is needed."""
        default = self._config.commits.default_release_type
        if self.has_changes:
            computed = compute_release_type(self.commit_messages, self._config.commits)
            return computed if computed is not None else default
        if self.is_initial_release():
            return default
        return None

    def next_version(self) -> str | None:
        release_type = self.release_type()
        if release_type is None:
            return None
        version_config = self._config.version
        return next_version(
            self.latest_version,
            release_type,
            default_first_version=version_config.default_first_version,
            use_version_prefix=version_config.use_version_prefix,
        )

    def next_tag(self) -> str | None:
        version = self.next_version()
        if version is None:
            return None
        return f"{self._name}{self._config.tag_separator}{version}"

    # -------------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        release_type = self.release_type()
        return {
            "name": self._name,
            "directory": self._relative_path,
            "commits": [commit.sha for commit in self._commits.values()],
            "tags": [tag.name for tag in self._tags],
            "releases": [release.title for release in self._releases],
            "latest_tag": self.latest_tag.name if self.latest_tag else None,
            "needs_release": self.needs_release(),
            "release_reasons": [str(reason) for reason in self.release_reasons()],
            "release_type": str(release_type) if release_type else None,
            "next_tag": self.next_tag(),
        }

    def __repr__(self) -> str:
        return (
            f"ModuleRecord(name={self._name!r}, directory={self._relative_path!r}, "
            f"commits={len(self._commits)}, tags={len(self._tags)}, "
            f"releases={len(self._releases)})"
        )
