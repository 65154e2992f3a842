"""Commit message classification.

Each commit message may cast a release-type vote. Two mutually exclusive
strategies are supported, selected once per run by configuration:

- ``keywords``: case-insensitive substring search against the major, minor
  and patch keyword lists, in that priority order.
- ``conventional-commits``: the header is parsed as
  ``type[(scope)][!]: description``. A ``!`` before the colon or a
  ``BREAKING CHANGE:`` / ``BREAKING-CHANGE:`` footer makes it a major
  release; ``feat`` is minor; everything else is patch.

Votes are folded with priority major > minor > patch. A message that casts
no vote is skipped; when no message votes, the caller applies the configured
default release type.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from monorelease.core.version import BumpType

if TYPE_CHECKING:
    from monorelease.config.models import CommitsConfig

logger = logging.getLogger(__name__)

# A `!` marks a breaking change only when it directly precedes the colon.
HEADER_PATTERN = re.compile(
    r"^(?P<type>\w+)(?:\((?P<scope>[^)\n]*)\))?(?P<bang>!)? *: *(?P<description>.+)$"
)
BREAKING_FOOTER_PATTERN = re.compile(r"^BREAKING[ -]CHANGE:", re.MULTILINE)

# Types with a fixed release level per preset. Unlisted types are patches.
PRESET_TYPES: dict[str, dict[str, BumpType]] = {
    "conventionalcommits": {"feat": BumpType.MINOR, "fix": BumpType.PATCH},
    "angular": {"feat": BumpType.MINOR, "fix": BumpType.PATCH, "perf": BumpType.PATCH},
}


@dataclass(frozen=True, slots=True)
class ParsedCommit:
    """A commit message parsed as a Conventional Commit."""

    commit_type: str
    scope: str | None
    description: str
    is_breaking: bool

    @classmethod
    def parse(cls, message: str) -> ParsedCommit | None:
        """Parse ``message``; return None if the header does not match."""
        trimmed = message.strip()
        if not trimmed:
            return None

        header = trimmed.splitlines()[0].strip()
        match = HEADER_PATTERN.match(header)
        if not match:
            return None

        has_bang = match.group("bang") is not None and header[match.end("bang")] == ":"
        has_footer = BREAKING_FOOTER_PATTERN.search(trimmed) is not None
        return cls(
            commit_type=match.group("type").lower(),
            scope=match.group("scope") or None,
            description=match.group("description").strip(),
            is_breaking=has_bang or has_footer,
        )


def parse_conventional_commit(message: str) -> ParsedCommit | None:
    """Parse a commit message per the Conventional Commits grammar."""
    return ParsedCommit.parse(message)


def detect_conventional_release_type(
    message: str, preset: str = "conventionalcommits"
) -> BumpType | None:
    """Release type for one message in conventional-commits mode.

    Returns None when the header is not a Conventional Commit.
    """
    parsed = parse_conventional_commit(message)
    if parsed is None:
        return None
    if parsed.is_breaking:
        return BumpType.MAJOR
    return PRESET_TYPES[preset].get(parsed.commit_type, BumpType.PATCH)


def detect_keyword_release_type(
    message: str,
    major_keywords: Sequence[str],
    minor_keywords: Sequence[str],
    patch_keywords: Sequence[str],
) -> BumpType | None:
    """Release type for one message in keyword mode."""
    cleaned = message.lower().strip()

    for bump_type, keywords in (
        (BumpType.MAJOR, major_keywords),
        (BumpType.MINOR, minor_keywords),
        (BumpType.PATCH, patch_keywords),
    ):
        if any(keyword.lower() in cleaned for keyword in keywords):
            return bump_type
    return None


def higher_priority(current: BumpType | None, candidate: BumpType) -> BumpType:
    """Return the stronger of two release types (major > minor > patch)."""
    if current is None or candidate.priority > current.priority:
        return candidate
    return current


def classify_message(message: str, config: CommitsConfig) -> BumpType | None:
    """Classify one message using the strategy selected in ``config``."""
    if config.mode == "conventional-commits":
        return detect_conventional_release_type(message, config.preset)
    return detect_keyword_release_type(
        message, config.major_keywords, config.minor_keywords, config.patch_keywords
    )


def compute_release_type(messages: Iterable[str], config: CommitsConfig) -> BumpType | None:
    """Fold the votes of all ``messages`` into one release type.

    Returns:
        The highest-priority vote, or None if no message voted
    """
    result: BumpType | None = None
    for message in messages:
        vote = classify_message(message, config)
        if vote is None:
            logger.debug("No release type vote for commit message: %s", message.strip()[:72])
            continue
        result = higher_priority(result, vote)
    return result
