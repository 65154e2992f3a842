"""Load repository history exported by a hosting collaborator.

Releases only exist on the hosting service, so they (and optionally commits
and tags) can be supplied as a JSON document::

    {
      "commits": [{"sha": "abc123", "message": "feat: x", "files": ["vpc/main.tf"]}],
      "tags": [{"name": "vpc/v1.0.0", "commitSHA": "abc123"}],
      "releases": [{"id": 1, "title": "vpc/v1.0.0", "body": "", "tagName": "vpc/v1.0.0"}]
    }

Missing sections are returned as None so callers can fall back to git.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from monorelease.core.records import Commit, Release, Tag
from monorelease.exceptions import HistoryError, RecordValidationError

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class History:
    commits: list[Commit] | None = None
    tags: list[Tag] | None = None
    releases: list[Release] | None = None


def _commit(data: dict[str, Any]) -> Commit:
    return Commit(
        sha=data["sha"],
        message=data.get("message", ""),
        files=tuple(data.get("files", [])),
    )


def _tag(data: dict[str, Any]) -> Tag:
    return Tag(name=data["name"], commit_sha=data.get("commitSHA", data.get("commit_sha", "")))


def _release(data: dict[str, Any]) -> Release:
    return Release(
        id=data["id"],
        title=data["title"],
        body=data.get("body") or "",
        tag_name=data.get("tagName", data.get("tag_name", "")),
    )


def parse_history(data: dict[str, Any]) -> History:
    """Convert a decoded history document into records.

    Raises:
        HistoryError: If the document or one of its entries is malformed
    """
    if not isinstance(data, dict):
        raise HistoryError("History document must be a JSON object")

    def convert(section: str, factory: Any) -> list[Any] | None:
        entries = data.get(section)
        if entries is None:
            return None
        if not isinstance(entries, list):
            raise HistoryError(f"History section {section!r} must be a list")
        try:
            return [factory(entry) for entry in entries]
        except (KeyError, TypeError, AttributeError, RecordValidationError) as e:
            raise HistoryError(f"Invalid entry in history section {section!r}: {e}") from e

    return History(
        commits=convert("commits", _commit),
        tags=convert("tags", _tag),
        releases=convert("releases", _release),
    )


def load_history(path: Path) -> History:
    """Read a history document from ``path``.

    Raises:
        HistoryError: If the file is missing, not JSON or malformed
    """
    try:
        data = json.loads(path.read_text())
    except FileNotFoundError as e:
        raise HistoryError(f"History file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise HistoryError(f"Invalid JSON in history file {path}: {e}") from e
    return parse_history(data)
