"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from monorelease.config.models import MonoreleaseConfig
from monorelease.core.records import Commit

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def config() -> MonoreleaseConfig:
    """Default configuration."""
    return MonoreleaseConfig()


@pytest.fixture
def make_workspace(tmp_path: Path) -> Callable[..., Path]:
    """Create a workspace containing the given files.

    Usage::

        workspace = make_workspace("vpc/main.tf", "s3/main.tf", "README.md")
    """

    def _make(*files: str) -> Path:
        workspace = tmp_path / "workspace"
        workspace.mkdir(exist_ok=True)
        for relative in files:
            path = workspace / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("# test\n")
        return workspace

    return _make


@pytest.fixture
def feat_commit() -> Commit:
    return Commit(sha="feat123", message="feat(vpc): add endpoints", files=("vpc/main.tf",))


@pytest.fixture
def fix_commit() -> Commit:
    return Commit(sha="fix456", message="fix(s3): correct bucket policy", files=("s3/main.tf",))


@pytest.fixture
def breaking_commit() -> Commit:
    return Commit(
        sha="break789",
        message="feat(vpc)!: drop legacy subnets\n\nBREAKING CHANGE: subnets input removed",
        files=("vpc/variables.tf",),
    )
