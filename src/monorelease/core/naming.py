"""Module naming and tag association.

Module names are derived from directory paths. Tags and releases are tied
to a module by name, but the separator between the name and the version
(and between path components) may have changed over a repository's
lifetime: ``modules/vpc/v1.0.0``, ``modules-vpc-v1.1.0`` and
``modules_vpc_v1.2.0`` all belong to the same module. Every comparison in
this module is therefore separator-agnostic.

Normalization scans characters directly instead of chaining regular
expressions so pathological paths stay linear.
"""

from __future__ import annotations

import re
import string
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from monorelease.core.records import Release, Tag

VALID_TAG_SEPARATORS: tuple[str, ...] = ("-", "_", "/", ".")
CANONICAL_SEPARATOR = "|"

_NAME_CHARACTERS = frozenset(string.ascii_lowercase + string.digits + "".join(VALID_TAG_SEPARATORS))

# Only the end of the string is inspected.
_VERSION_SUFFIX = re.compile(
    "[" + re.escape("".join(VALID_TAG_SEPARATORS)) + r"](v?\d+\.\d+\.\d+)\Z"
)


def _collapse_separators(value: str) -> str:
    """Collapse runs of separator characters to their first character."""
    out: list[str] = []
    for ch in value:
        if ch in VALID_TAG_SEPARATORS and out and out[-1] in VALID_TAG_SEPARATORS:
            continue
        out.append(ch)
    return "".join(out)


def _strip_separators(value: str) -> str:
    start, end = 0, len(value)
    while start < end and value[start] in VALID_TAG_SEPARATORS:
        start += 1
    while end > start and value[end - 1] in VALID_TAG_SEPARATORS:
        end -= 1
    return value[start:end]


def module_name_from_path(relative_path: str, separator: str = "/") -> str:
    """Derive a module name from its path relative to the workspace root.

    The result is lowercase, uses ``separator`` between path components,
    contains no runs of separator characters and has no leading or trailing
    separator. Applying the function to its own output returns it unchanged.

    >>> module_name_from_path("Modules/AWS/S3 Bucket", "-")
    'modules-aws-s3-bucket'
    """
    cleaned: list[str] = []
    in_invalid_run = False
    for ch in relative_path.strip().replace("\\", "/").lower():
        if ch in _NAME_CHARACTERS:
            cleaned.append(ch)
            in_invalid_run = False
        elif not in_invalid_run:
            cleaned.append("-")
            in_invalid_run = True

    segments = []
    for segment in "".join(cleaned).split("/"):
        segment = _strip_separators(_collapse_separators(segment))
        if segment:
            segments.append(segment)

    return _strip_separators(_collapse_separators(separator.join(segments)))


def normalize_separators(value: str) -> str:
    """Replace every valid separator character with one canonical marker."""
    return "".join(CANONICAL_SEPARATOR if ch in VALID_TAG_SEPARATORS else ch for ch in value)


def split_tag(tag: str) -> tuple[str, str] | None:
    """Split ``<name><sep><version>`` into name and version text.

    Returns None when the tag has no ``v?#.#.#`` suffix after a separator.
    """
    match = _VERSION_SUFFIX.search(tag)
    if not match or match.start() == 0:
        return None
    return tag[: match.start()], match.group(1)


def is_associated(module_name: str, tag_name: str) -> bool:
    """Whether a tag or release title belongs to ``module_name``."""
    parts = split_tag(tag_name)
    if parts is None:
        return False
    return normalize_separators(parts[0]) == normalize_separators(module_name)


def tags_for_module(module_name: str, tags: Iterable[Tag]) -> list[Tag]:
    """Filter a repository-wide tag list down to one module."""
    return [tag for tag in tags if is_associated(module_name, tag.name)]


def releases_for_module(module_name: str, releases: Iterable[Release]) -> list[Release]:
    """Filter a repository-wide release list down to one module."""
    return [release for release in releases if is_associated(module_name, release.title)]
