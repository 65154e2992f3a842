"""Detect tags and releases that no longer belong to any module.

A tag or release is orphaned when no current module name is associated
with it (see :func:`monorelease.core.naming.is_associated`). This covers
modules that were deleted or renamed as well as tags that never followed
the ``<module><sep><version>`` convention.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from monorelease.core.naming import is_associated

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from monorelease.core.module import ModuleRecord
    from monorelease.core.records import Release, Tag

logger = logging.getLogger(__name__)


def _is_orphaned(name: str, module_names: Sequence[str]) -> bool:
    return not any(is_associated(module_name, name) for module_name in module_names)


def tags_to_delete(all_tags: Iterable[Tag], modules: Iterable[ModuleRecord]) -> list[str]:
    """Names of tags not associated with any module, sorted."""
    module_names = [module.name for module in modules]
    orphaned = sorted({tag.name for tag in all_tags if _is_orphaned(tag.name, module_names)})
    logger.info("Found %d tag%s to delete", len(orphaned), "" if len(orphaned) == 1 else "s")
    logger.debug("Tags to delete: %s", orphaned)
    return orphaned


def releases_to_delete(
    all_releases: Iterable[Release], modules: Iterable[ModuleRecord]
) -> list[Release]:
    """Releases whose title is not associated with any module, sorted by title."""
    module_names = [module.name for module in modules]
    orphaned = sorted(
        (release for release in all_releases if _is_orphaned(release.title, module_names)),
        key=lambda release: (release.title, release.id),
    )
    logger.info(
        "Found %d release%s to delete", len(orphaned), "" if len(orphaned) == 1 else "s"
    )
    logger.debug("Releases to delete: %s", [release.title for release in orphaned])
    return orphaned
