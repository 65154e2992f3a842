"""Core business logic for monorelease.

This module contains the release-planning engine:
- Commit, tag and release records
- Module naming and separator-agnostic tag association
- Version parsing and bumping
- Commit message classification (keywords or Conventional Commits)
- Module discovery, commit association and orphan detection
"""

from __future__ import annotations

from monorelease.core.commits import (
    ParsedCommit,
    compute_release_type,
    detect_conventional_release_type,
    detect_keyword_release_type,
    higher_priority,
    parse_conventional_commit,
)
from monorelease.core.module import ModuleRecord, ReleaseReason
from monorelease.core.naming import (
    VALID_TAG_SEPARATORS,
    is_associated,
    module_name_from_path,
    releases_for_module,
    tags_for_module,
)
from monorelease.core.orphans import releases_to_delete, tags_to_delete
from monorelease.core.parser import ModuleParser, parse_modules
from monorelease.core.records import Commit, Release, Tag
from monorelease.core.version import (
    BumpType,
    Version,
    compare_versions,
    extract_version,
    next_version,
    parse_version,
)

__all__ = [
    "VALID_TAG_SEPARATORS",
    # Version
    "BumpType",
    # Records
    "Commit",
    # Modules
    "ModuleParser",
    "ModuleRecord",
    # Commits
    "ParsedCommit",
    "Release",
    "ReleaseReason",
    "Tag",
    "Version",
    "compare_versions",
    "compute_release_type",
    "detect_conventional_release_type",
    "detect_keyword_release_type",
    "extract_version",
    "higher_priority",
    # Naming
    "is_associated",
    "module_name_from_path",
    "next_version",
    "parse_conventional_commit",
    "parse_modules",
    "parse_version",
    "releases_for_module",
    # Orphans
    "releases_to_delete",
    "tags_for_module",
    "tags_to_delete",
]
