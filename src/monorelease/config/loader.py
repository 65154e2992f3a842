"""Configuration loading.

Configuration lives either in a standalone ``monorelease.toml`` (top-level
keys) or in the ``[tool.monorelease]`` table of ``pyproject.toml``. The
nearest file found while walking up from the project directory wins.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

import pydantic

from monorelease.config.models import MonoreleaseConfig
from monorelease.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "monorelease.toml"
PYPROJECT_FILENAME = "pyproject.toml"
TOOL_SECTION = "monorelease"


def _walk_up(start: Path, filename: str) -> Path | None:
    current = start.resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def load_toml(path: Path) -> dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_tool_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.monorelease]`` table, or an empty dict."""
    return dict(pyproject.get("tool", {}).get(TOOL_SECTION, {}))


def build_config(data: dict[str, Any]) -> MonoreleaseConfig:
    """Validate raw configuration data.

    Raises:
        ConfigValidationError: If any value is invalid
    """
    try:
        return MonoreleaseConfig.model_validate(data)
    except pydantic.ValidationError as e:
        raise ConfigValidationError(f"Invalid monorelease configuration:\n{e}") from e


def load_config(path: Path | None = None) -> MonoreleaseConfig:
    """Load configuration for the project at ``path``.

    ``monorelease.toml`` takes precedence over ``pyproject.toml``. When
    neither exists the defaults are returned.
    """
    start = path or Path.cwd()

    standalone = _walk_up(start, CONFIG_FILENAME)
    if standalone is not None:
        logger.debug("Loading configuration from %s", standalone)
        return build_config(load_toml(standalone))

    pyproject = _walk_up(start, PYPROJECT_FILENAME)
    if pyproject is not None:
        logger.debug("Loading configuration from [tool.%s] in %s", TOOL_SECTION, pyproject)
        return build_config(extract_tool_config(load_toml(pyproject)))

    logger.debug("No configuration file found from %s; using defaults", start)
    return MonoreleaseConfig()
