"""Pydantic models for monorelease configuration.

The configuration is read from ``[tool.monorelease]`` in ``pyproject.toml``
(or from a standalone ``monorelease.toml``) and validated once, before the
engine runs. Every model has sensible defaults so an empty section yields a
working configuration.
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from monorelease.core.naming import VALID_TAG_SEPARATORS
from monorelease.core.version import BumpType

SemverMode = Literal["keywords", "conventional-commits"]
ConventionalPreset = Literal["conventionalcommits", "angular"]

DEFAULT_FIRST_VERSION_PATTERN = re.compile(r"^v?\d+\.\d+\.\d+$")


def _clean_keywords(value: list[str]) -> list[str]:
    """Trim entries, drop blanks and duplicates while keeping order."""
    cleaned: list[str] = []
    for item in value:
        keyword = item.strip()
        if keyword and keyword not in cleaned:
            cleaned.append(keyword)
    return cleaned


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class CommitsConfig(_Section):
    """How commit messages are turned into release types."""

    mode: SemverMode = "keywords"
    preset: ConventionalPreset = "conventionalcommits"
    major_keywords: list[str] = Field(default_factory=lambda: ["major change", "breaking change"])
    minor_keywords: list[str] = Field(default_factory=lambda: ["feat", "feature"])
    patch_keywords: list[str] = Field(default_factory=lambda: ["fix", "chore", "docs"])
    default_release_type: BumpType = BumpType.PATCH

    @field_validator("major_keywords", "minor_keywords", "patch_keywords")
    @classmethod
    def _validate_keywords(cls, value: list[str]) -> list[str]:
        cleaned = _clean_keywords(value)
        if not cleaned:
            raise ValueError("keyword lists must contain at least one non-blank keyword")
        return cleaned


class VersionConfig(_Section):
    """Version and tag formatting."""

    default_first_version: str = "v1.0.0"
    use_version_prefix: bool = True
    tag_separator: str = "/"

    @field_validator("default_first_version")
    @classmethod
    def _validate_first_version(cls, value: str) -> str:
        value = value.strip()
        if not DEFAULT_FIRST_VERSION_PATTERN.match(value):
            raise ValueError(
                f"default_first_version must be in the format v#.#.# or #.#.# (got {value!r})"
            )
        return value

    @field_validator("tag_separator")
    @classmethod
    def _validate_separator(cls, value: str) -> str:
        if value not in VALID_TAG_SEPARATORS:
            allowed = ", ".join(repr(sep) for sep in VALID_TAG_SEPARATORS)
            raise ValueError(f"tag_separator must be one of {allowed} (got {value!r})")
        return value


class ModulesConfig(_Section):
    """Module discovery and change detection."""

    definition_patterns: list[str] = Field(default_factory=lambda: ["*.tf"])
    path_ignore: list[str] = Field(default_factory=list)
    change_exclude_patterns: list[str] = Field(
        default_factory=lambda: [".gitignore", "*.md", "*.tftest.hcl", "tests/**"]
    )
    max_depth: int | None = None

    @field_validator("definition_patterns")
    @classmethod
    def _validate_definition_patterns(cls, value: list[str]) -> list[str]:
        cleaned = _clean_keywords(value)
        if not cleaned:
            raise ValueError("definition_patterns must contain at least one pattern")
        return cleaned

    @field_validator("path_ignore", "change_exclude_patterns")
    @classmethod
    def _clean_patterns(cls, value: list[str]) -> list[str]:
        return _clean_keywords(value)

    @field_validator("max_depth")
    @classmethod
    def _validate_max_depth(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ValueError("max_depth must be an integer greater than or equal to one")
        return value

    @model_validator(mode="after")
    def _definitions_not_excluded(self) -> ModulesConfig:
        overlap = [p for p in self.definition_patterns if p in self.change_exclude_patterns]
        if overlap:
            raise ValueError(
                f"change_exclude_patterns cannot contain {overlap[0]!r} "
                "as it is required for module detection"
            )
        return self


class MonoreleaseConfig(_Section):
    """Root configuration model."""

    delete_legacy_tags: bool = True
    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)
    modules: ModulesConfig = Field(default_factory=ModulesConfig)

    @property
    def tag_separator(self) -> str:
        """Separator joining a module name to its version in new tags."""
        return self.version.tag_separator
