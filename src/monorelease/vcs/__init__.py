"""Sources of repository history."""

from __future__ import annotations

from monorelease.vcs.git import GitRepository
from monorelease.vcs.history import History, load_history

__all__ = ["GitRepository", "History", "load_history"]
