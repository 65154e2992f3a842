"""Tests for orphaned tag and release detection."""

from __future__ import annotations

from pathlib import Path

from monorelease.config.models import MonoreleaseConfig
from monorelease.core.module import ModuleRecord
from monorelease.core.orphans import releases_to_delete, tags_to_delete
from monorelease.core.records import Release, Tag

WORKSPACE = Path("/workspace")


def modules(*names: str) -> list[ModuleRecord]:
    config = MonoreleaseConfig()
    return [ModuleRecord(WORKSPACE / name, WORKSPACE, config) for name in names]


class TestTagsToDelete:
    """Tests for tags_to_delete()."""

    def test_tags_of_removed_module(self):
        tags = [Tag("a/v1.0.0"), Tag("b/v1.0.0"), Tag("c/v1.0.0")]
        assert tags_to_delete(tags, modules("a", "b")) == ["c/v1.0.0"]

    def test_separator_variants_are_kept(self):
        tags = [Tag("vpc/v1.0.0"), Tag("vpc-v1.1.0"), Tag("modules_aws_s3_2.0.0")]
        assert tags_to_delete(tags, modules("vpc", "modules/aws/s3")) == []

    def test_malformed_tags_are_orphaned(self):
        tags = [Tag("vpc/v1.0.0"), Tag("v1.0.0"), Tag("latest"), Tag("vpc/v1.0")]
        assert tags_to_delete(tags, modules("vpc")) == ["latest", "v1.0.0", "vpc/v1.0"]

    def test_result_sorted_and_unique(self):
        tags = [Tag("z/v1.0.0"), Tag("m/v1.0.0"), Tag("z/v1.0.0", "other-sha")]
        assert tags_to_delete(tags, modules("vpc")) == ["m/v1.0.0", "z/v1.0.0"]

    def test_no_modules_means_everything_is_orphaned(self):
        assert tags_to_delete([Tag("vpc/v1.0.0")], []) == ["vpc/v1.0.0"]

    def test_empty(self):
        assert tags_to_delete([], modules("vpc")) == []


class TestReleasesToDelete:
    """Tests for releases_to_delete()."""

    def test_releases_of_removed_module(self):
        releases = [
            Release(3, "c/v1.0.0"),
            Release(1, "a/v1.0.0"),
            Release(2, "b-v1.0.0"),
            Release(4, "Release notes"),
        ]
        result = releases_to_delete(releases, modules("a", "b"))

        assert [release.id for release in result] == [4, 3]

    def test_ties_ordered_by_id(self):
        releases = [Release(9, "gone/v1.0.0"), Release(2, "gone/v1.0.0")]
        result = releases_to_delete(releases, modules("vpc"))

        assert [release.id for release in result] == [2, 9]
