"""Read commit and tag history from a local git checkout.

git is called as a subprocess and its output parsed. Only reads are
performed; creating or pushing tags belongs to the hosting collaborator.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from monorelease.core.records import Commit, Tag
from monorelease.exceptions import GitError

logger = logging.getLogger(__name__)

_RECORD = "\x1e"
_FIELD = "\x1f"


class GitRepository:
    """A local git repository.

    Args:
        path: Any directory inside the working tree

    Raises:
        GitError: If ``path`` is not inside a git working tree
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(self._run_in(Path(path), "rev-parse", "--show-toplevel").strip())

    @staticmethod
    def _run_in(cwd: Path, *args: str) -> str:
        try:
            result = subprocess.run(
                ["git", *args],
                capture_output=True,
                text=True,
                check=True,
                cwd=cwd,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {' '.join(args)} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout

    def _run(self, *args: str) -> str:
        return self._run_in(self.path, *args)

    def list_commits(self, since: str | None = None, head: str = "HEAD") -> list[Commit]:
        """Commits reachable from ``head`` but not from ``since``, oldest first.

        Each commit carries the files it changed, relative to the repository
        root. Merge commits report no files.
        """
        revision = f"{since}..{head}" if since else head
        output = self._run(
            "log",
            "--reverse",
            "--no-renames",
            "--name-only",
            f"--format={_RECORD}%H{_FIELD}%B{_FIELD}",
            revision,
        )

        commits: list[Commit] = []
        for record in output.split(_RECORD):
            if not record.strip():
                continue
            sha, message, files_block = record.split(_FIELD, 2)
            files = tuple(line.strip() for line in files_block.splitlines() if line.strip())
            commits.append(Commit(sha=sha.strip(), message=message.strip(), files=files))

        count = len(commits)
        logger.info("Found %d commit%s in %s", count, "" if count == 1 else "s", revision)
        return commits

    def list_ancestors(self, revision: str) -> set[str]:
        """Shas of ``revision`` and every commit reachable from it."""
        output = self._run("rev-list", revision)
        return {line.strip() for line in output.splitlines() if line.strip()}

    def list_tags(self) -> list[Tag]:
        """All tags with the commit they point to (annotated tags are peeled)."""
        output = self._run(
            "for-each-ref",
            "refs/tags",
            "--format=%(refname:short)%1f%(objectname)%1f%(*objectname)",
        )

        tags: list[Tag] = []
        for line in output.splitlines():
            if not line.strip():
                continue
            name, object_sha, peeled_sha = line.split(_FIELD)
            tags.append(Tag(name=name, commit_sha=peeled_sha or object_sha))

        logger.info("Found %d tag%s", len(tags), "" if len(tags) == 1 else "s")
        return tags
