"""Exception hierarchy for monorelease.

All errors raised by monorelease derive from :class:`MonoreleaseError`
so callers can catch a single base class at the edge of the program.

Skip conditions (a file outside every module, an excluded file, a commit
message that casts no vote) are not errors; they are logged and processing
continues.
"""

from __future__ import annotations


class MonoreleaseError(Exception):
    """Base class for all monorelease errors."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(MonoreleaseError):
    """Base class for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """A required configuration file could not be located."""


class ConfigValidationError(ConfigError):
    """Configuration values are malformed or inconsistent."""


# =============================================================================
# Engine data validation
# =============================================================================


class ValidationError(MonoreleaseError):
    """Historical or input data failed validation.

    These are fatal to a run: corrupted history must never be coerced
    into a guessed version.
    """


class RecordValidationError(ValidationError):
    """A commit, tag or release record was constructed with invalid fields."""


class VersionFormatError(ValidationError):
    """A version string or tag name does not follow the expected format."""


class TagValidationError(ValidationError):
    """A tag assigned to a module is not associated with it."""


class ReleaseValidationError(ValidationError):
    """A release assigned to a module is not associated with it."""


# =============================================================================
# Collaborators
# =============================================================================


class VCSError(MonoreleaseError):
    """Base class for errors raised while reading repository history."""


class GitError(VCSError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        base = super().__str__()
        if self.stderr:
            return f"{base}\n{self.stderr.strip()}"
        return base


class HistoryError(VCSError):
    """A history document could not be read or has an invalid shape."""
