"""Tests for ModuleRecord."""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from monorelease.config.models import CommitsConfig, MonoreleaseConfig, VersionConfig
from monorelease.core.module import ModuleRecord, ReleaseReason
from monorelease.core.records import Commit, Release, Tag
from monorelease.core.version import BumpType, compare_versions, extract_version
from monorelease.exceptions import ReleaseValidationError, TagValidationError

WORKSPACE = Path("/workspace")


def make_module(relative: str = "network", config: MonoreleaseConfig | None = None) -> ModuleRecord:
    return ModuleRecord(WORKSPACE / relative, WORKSPACE, config or MonoreleaseConfig())


class TestIdentity:
    """Tests for module naming."""

    def test_name_from_relative_path(self):
        module = make_module("modules/AWS/vpc")
        assert module.name == "modules/aws/vpc"
        assert module.relative_path == "modules/AWS/vpc"
        assert module.directory == WORKSPACE / "modules/AWS/vpc"

    def test_name_uses_configured_separator(self):
        config = MonoreleaseConfig(version=VersionConfig(tag_separator="-"))
        assert make_module("modules/aws/vpc", config).name == "modules-aws-vpc"


class TestCommits:
    """Tests for add_commit()."""

    def test_add_commit_is_idempotent(self):
        module = make_module()
        commit = Commit("abc", "fix: a", ("network/main.tf", "network/variables.tf"))
        module.add_commit(commit)
        module.add_commit(commit)

        assert len(module.commits) == 1
        assert module.commit_messages == ["fix: a"]


class TestTags:
    """Tests for set_tags()."""

    def test_sorted_descending_numerically(self):
        module = make_module()
        module.set_tags([Tag("network/v1.9.0"), Tag("network/v1.10.0"), Tag("network/v1.2.0")])

        assert [t.name for t in module.tags] == [
            "network/v1.10.0",
            "network/v1.9.0",
            "network/v1.2.0",
        ]

    def test_order_stable_under_shuffling(self):
        names = [f"network/v{a}.{b}.{c}" for a in range(3) for b in (0, 2, 10) for c in (1, 9, 11)]
        tags = [Tag(name) for name in names]
        rng = random.Random(7)
        for _ in range(5):
            rng.shuffle(tags)
            module = make_module()
            module.set_tags(tags)
            versions = [extract_version(t.name, "network") for t in module.tags]
            for newer, older in zip(versions, versions[1:], strict=False):
                assert compare_versions(newer, older) >= 0

    def test_separator_tolerance(self):
        """Tags from older naming conventions resolve to the same module."""
        module = make_module()
        module.set_tags([Tag("network/v1.0.0"), Tag("network-v1.1.0")])

        assert module.latest_tag.name == "network-v1.1.0"
        assert module.latest_tag_version == "v1.1.0"

    def test_set_tags_twice_is_idempotent(self):
        module = make_module()
        tags = [Tag("network/v1.0.0"), Tag("network/v2.0.0"), Tag("network-v1.5.0")]
        module.add_commit(Commit("abc", "feat: x", ("network/main.tf",)))

        module.set_tags(tags)
        first_order, first_next = module.tags, module.next_version()
        module.set_tags(tags)

        assert module.tags == first_order
        assert module.next_version() == first_next == "v2.1.0"

    def test_set_tags_replaces(self):
        module = make_module()
        module.set_tags([Tag("network/v1.0.0")])
        module.set_tags([])

        assert module.tags == []
        assert module.latest_tag is None

    @pytest.mark.parametrize("name", ["other/v1.0.0", "network/latest", "network/v1.0"])
    def test_invalid_tag_raises(self, name):
        module = make_module()
        with pytest.raises(TagValidationError):
            module.set_tags([Tag("network/v1.0.0"), Tag(name)])

    def test_invalid_tag_leaves_previous_tags(self):
        module = make_module()
        module.set_tags([Tag("network/v1.0.0")])
        with pytest.raises(TagValidationError):
            module.set_tags([Tag("other/v2.0.0")])

        assert [t.name for t in module.tags] == ["network/v1.0.0"]


class TestReleases:
    """Tests for set_releases()."""

    def test_sorted_descending(self):
        module = make_module()
        module.set_releases(
            [
                Release(1, "network/v1.0.0"),
                Release(3, "network/v2.0.0"),
                Release(2, "network-v1.1.0"),
            ]
        )
        assert [r.id for r in module.releases] == [3, 2, 1]

    def test_invalid_release_raises(self):
        module = make_module()
        with pytest.raises(ReleaseValidationError):
            module.set_releases([Release(1, "Release 1.0.0")])


class TestReleaseDecisions:
    """Tests for needs_release(), release_type(), next_version() and next_tag()."""

    def test_never_released_module(self):
        module = make_module()

        assert module.needs_release()
        assert module.release_reasons() == [ReleaseReason.INITIAL]
        assert module.release_type() == BumpType.PATCH
        assert module.next_version() == "v1.0.0"
        assert module.next_tag() == "network/v1.0.0"

    def test_unchanged_released_module(self):
        module = make_module()
        module.set_tags([Tag("network/v1.0.0")])

        assert not module.needs_release()
        assert module.release_reasons() == []
        assert module.release_type() is None
        assert module.next_version() is None
        assert module.next_tag() is None

    def test_changed_module(self):
        module = make_module()
        module.set_tags([Tag("network/v1.2.3")])
        module.add_commit(Commit("a", "feat: add peering", ("network/main.tf",)))
        module.add_commit(Commit("b", "fix: typo", ("network/main.tf",)))

        assert module.needs_release()
        assert module.release_reasons() == [ReleaseReason.DIRECT_CHANGES]
        assert module.release_type() == BumpType.MINOR
        assert module.next_tag() == "network/v1.3.0"

    def test_default_release_type_when_no_vote(self):
        config = MonoreleaseConfig(
            commits=CommitsConfig(mode="conventional-commits", default_release_type="minor")
        )
        module = make_module(config=config)
        module.set_tags([Tag("network/v1.0.0")])
        module.add_commit(Commit("a", "update notes", ("network/main.tf",)))

        assert module.release_type() == BumpType.MINOR
        assert module.next_version() == "v1.1.0"

    def test_initial_release_with_changes(self):
        module = make_module()
        module.add_commit(Commit("a", "breaking change: new api", ("network/main.tf",)))

        assert module.release_reasons() == [ReleaseReason.INITIAL, ReleaseReason.DIRECT_CHANGES]
        assert module.release_type() == BumpType.MAJOR
        assert module.next_version() == "v1.0.0"

    def test_next_tag_uses_separator_and_prefix_settings(self):
        config = MonoreleaseConfig(
            version=VersionConfig(tag_separator="-", use_version_prefix=False)
        )
        module = make_module("modules/vpc", config)
        module.set_tags([Tag("modules/vpc/v1.0.0")])
        module.add_commit(Commit("a", "fix: x", ("modules/vpc/main.tf",)))

        assert module.next_tag() == "modules-vpc-1.0.1"

    def test_to_dict(self):
        module = make_module()
        module.set_tags([Tag("network/v1.0.0", "sha1")])
        module.add_commit(Commit("a", "fix: x", ("network/main.tf",)))

        data = module.to_dict()
        assert data["name"] == "network"
        assert data["commits"] == ["a"]
        assert data["latest_tag"] == "network/v1.0.0"
        assert data["release_reasons"] == ["direct-changes"]
        assert data["release_type"] == "patch"
        assert data["next_tag"] == "network/v1.0.1"
