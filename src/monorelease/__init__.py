"""monorelease: semantic-version release planning for monorepo modules."""

from __future__ import annotations

__version__ = "0.1.0"
