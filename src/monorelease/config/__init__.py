"""Configuration management for monorelease."""

from __future__ import annotations

from monorelease.config.loader import load_config
from monorelease.config.models import (
    CommitsConfig,
    ModulesConfig,
    MonoreleaseConfig,
    VersionConfig,
)

__all__ = [
    "CommitsConfig",
    "ModulesConfig",
    "MonoreleaseConfig",
    "VersionConfig",
    "load_config",
]
