"""Semantic version parsing and manipulation.

Versions are plain ``MAJOR.MINOR.PATCH`` triples, optionally written with a
leading ``v``. Tags embed a version after the module name and a separator,
for example ``modules/vpc/v1.2.3`` or ``modules-vpc-1.2.3``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum

from monorelease.core.naming import normalize_separators, split_tag
from monorelease.exceptions import VersionFormatError

VERSION_PATTERN = re.compile(r"^(v?)(\d+)\.(\d+)\.(\d+)$")


class BumpType(StrEnum):
    """Release severity: the version component to increment."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"

    @property
    def priority(self) -> int:
        return _PRIORITY[self]


_PRIORITY = {BumpType.PATCH: 1, BumpType.MINOR: 2, BumpType.MAJOR: 3}


@dataclass(frozen=True, order=True, slots=True)
class Version:
    """A semantic version. Ordering is numeric; the ``v`` prefix is ignored."""

    major: int
    minor: int
    patch: int
    prefixed: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.patch) < 0:
            raise VersionFormatError(f"Version components must be non-negative: {self!r}")

    @classmethod
    def parse(cls, value: str) -> Version:
        """Parse ``1.2.3`` or ``v1.2.3``.

        Raises:
            VersionFormatError: If the string is not a plain semantic version
        """
        match = VERSION_PATTERN.match(value.strip())
        if not match:
            raise VersionFormatError(f"Invalid version {value!r}; expected v#.#.# or #.#.#")
        prefix, major, minor, patch = match.groups()
        return cls(int(major), int(minor), int(patch), prefixed=prefix == "v")

    def bump(self, bump_type: BumpType) -> Version:
        """Return the next version for ``bump_type``, keeping the prefix style."""
        bump_type = BumpType(bump_type)
        if bump_type is BumpType.MAJOR:
            return Version(self.major + 1, 0, 0, self.prefixed)
        if bump_type is BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0, self.prefixed)
        return Version(self.major, self.minor, self.patch + 1, self.prefixed)

    def with_prefix(self, prefixed: bool) -> Version:
        return Version(self.major, self.minor, self.patch, prefixed)

    def __str__(self) -> str:
        core = f"{self.major}.{self.minor}.{self.patch}"
        return f"v{core}" if self.prefixed else core


def parse_version(value: str) -> Version:
    """Parse a version string. See :meth:`Version.parse`."""
    return Version.parse(value)


def compare_versions(a: Version, b: Version) -> int:
    """Compare two versions numerically, returning -1, 0 or 1."""
    left = (a.major, a.minor, a.patch)
    right = (b.major, b.minor, b.patch)
    return (left > right) - (left < right)


def extract_version(tag: str, module_name: str) -> Version:
    """Extract the version embedded in a tag or release title.

    The tag must be the module name (compared separator-agnostically), one
    valid separator, an optional ``v`` and three dot-separated integers.

    Raises:
        VersionFormatError: If the tag does not belong to the module or has
            no valid version suffix
    """
    parts = split_tag(tag)
    if parts is None:
        raise VersionFormatError(
            f"Invalid tag format {tag!r}; expected '{module_name}<separator>v#.#.#'"
        )
    name_part, version_part = parts
    if normalize_separators(name_part) != normalize_separators(module_name):
        raise VersionFormatError(f"Tag {tag!r} does not belong to module {module_name!r}")

    return Version.parse(version_part)


def next_version(
    base: Version | None,
    bump_type: BumpType,
    *,
    default_first_version: str = "v1.0.0",
    use_version_prefix: bool | None = None,
) -> str:
    """Compute the next version string.

    Args:
        base: Latest released version, or None if the module was never tagged
        bump_type: Severity of the release
        default_first_version: Returned (prefix-adjusted) when ``base`` is None
        use_version_prefix: Force the ``v`` prefix on or off. None keeps the
            prefix style of ``base`` (or of ``default_first_version``).
    """
    if base is None:
        first = Version.parse(default_first_version)
        if use_version_prefix is not None:
            first = first.with_prefix(use_version_prefix)
        return str(first)

    bumped = base.bump(bump_type)
    if use_version_prefix is not None:
        bumped = bumped.with_prefix(use_version_prefix)
    return str(bumped)
