"""Immutable records ingested from repository history.

Commits, tags and releases are facts supplied by collaborators (local git,
a hosting API export). They are validated once, at construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from monorelease.exceptions import RecordValidationError


@dataclass(frozen=True, slots=True)
class Commit:
    """A commit and the files it effectively changed.

    File paths are relative to the workspace root and use ``/`` separators.
    """

    sha: str
    message: str
    files: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.sha or not self.sha.strip():
            raise RecordValidationError("Commit sha cannot be empty")
        # Accept any iterable of paths but store a normalized tuple
        files = tuple(path.replace("\\", "/").lstrip("/") for path in self.files)
        object.__setattr__(self, "files", files)

    @property
    def subject(self) -> str:
        """First line of the commit message."""
        stripped = self.message.strip()
        return stripped.splitlines()[0].strip() if stripped else ""


@dataclass(frozen=True, slots=True)
class Tag:
    """A git tag and the commit it points to."""

    name: str
    commit_sha: str = ""

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise RecordValidationError("Tag name cannot be empty")

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "commit_sha": self.commit_sha}


@dataclass(frozen=True, slots=True)
class Release:
    """A hosted release. Its ``title`` carries the module name and version."""

    id: int
    title: str
    body: str = ""
    tag_name: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise RecordValidationError(f"Release id must be an integer (got {self.id!r})")
        if not self.title or not self.title.strip():
            raise RecordValidationError(f"Release {self.id} has an empty title")

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "body": self.body, "tag_name": self.tag_name}
