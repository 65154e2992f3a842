"""Tests for commit message classification."""

from __future__ import annotations

import pytest

from monorelease.config.models import CommitsConfig
from monorelease.core.commits import (
    ParsedCommit,
    classify_message,
    compute_release_type,
    detect_conventional_release_type,
    detect_keyword_release_type,
    higher_priority,
    parse_conventional_commit,
)
from monorelease.core.version import BumpType

MAJOR = ["major change", "breaking change"]
MINOR = ["feat", "feature"]
PATCH = ["fix", "chore", "docs"]


class TestParseConventionalCommit:
    """Tests for ParsedCommit.parse()."""

    def test_parse_simple_feat(self):
        """Parse a simple feat commit."""
        pc = parse_conventional_commit("feat: add new feature")

        assert pc is not None
        assert pc.commit_type == "feat"
        assert pc.scope is None
        assert pc.description == "add new feature"
        assert not pc.is_breaking

    def test_parse_with_scope(self):
        """Parse commit with scope."""
        pc = parse_conventional_commit("fix(api): handle null response")

        assert pc.commit_type == "fix"
        assert pc.scope == "api"
        assert pc.description == "handle null response"

    def test_parse_breaking_with_exclamation(self):
        """Parse breaking change with ! indicator."""
        pc = parse_conventional_commit("feat!: redesign API")

        assert pc.is_breaking
        assert pc.commit_type == "feat"

    def test_parse_breaking_with_scope_and_exclamation(self):
        """Parse breaking change with scope and ! indicator."""
        pc = parse_conventional_commit("feat(core)!: change config format")

        assert pc.is_breaking
        assert pc.scope == "core"

    def test_parse_breaking_footer(self):
        """BREAKING CHANGE footer marks the commit breaking."""
        pc = parse_conventional_commit("feat: new feature\n\nBREAKING CHANGE: old API removed")

        assert pc.is_breaking
        assert pc.description == "new feature"

    def test_parse_breaking_hyphen_footer(self):
        """BREAKING-CHANGE footer marks the commit breaking."""
        pc = parse_conventional_commit("fix: tweak\n\nBREAKING-CHANGE: output renamed")

        assert pc.is_breaking

    def test_type_is_lowercased(self):
        """Commit types are normalized to lowercase."""
        pc = parse_conventional_commit("FEAT: uppercase type")

        assert pc.commit_type == "feat"

    def test_parse_non_conventional(self):
        """Messages without a type prefix are not conventional."""
        assert parse_conventional_commit("Updated the readme file") is None

    def test_parse_empty(self):
        """Empty messages are not conventional."""
        assert ParsedCommit.parse("   ") is None


class TestDetectConventionalReleaseType:
    """Tests for detect_conventional_release_type()."""

    def test_bang_overrides_fix(self):
        """fix! is a major release."""
        assert detect_conventional_release_type("fix!: patch security hole") == BumpType.MAJOR

    def test_feat_is_minor(self):
        assert detect_conventional_release_type("feat: add login") == BumpType.MINOR

    def test_fix_is_patch(self):
        assert detect_conventional_release_type("fix: off by one") == BumpType.PATCH

    def test_other_type_is_patch(self):
        """Any recognized type other than feat is a patch release."""
        assert detect_conventional_release_type("chore: tidy") == BumpType.PATCH

    def test_perf_with_angular_preset(self):
        assert detect_conventional_release_type("perf: faster", "angular") == BumpType.PATCH

    def test_footer_overrides_type(self):
        message = "docs: rewrite\n\nBREAKING CHANGE: variables renamed"
        assert detect_conventional_release_type(message) == BumpType.MAJOR

    def test_no_vote_without_type(self):
        assert detect_conventional_release_type("update notes") is None


class TestDetectKeywordReleaseType:
    """Tests for detect_keyword_release_type()."""

    def test_major_keyword(self):
        result = detect_keyword_release_type("BREAKING CHANGE: remove API", MAJOR, MINOR, PATCH)
        assert result == BumpType.MAJOR

    def test_minor_keyword(self):
        assert detect_keyword_release_type("feat: add login", MAJOR, MINOR, PATCH) == BumpType.MINOR

    def test_patch_keyword(self):
        assert detect_keyword_release_type("Fix typo", MAJOR, MINOR, PATCH) == BumpType.PATCH

    def test_major_takes_priority(self):
        """The major list is checked before the minor list."""
        message = "feat: new input (breaking change)"
        assert detect_keyword_release_type(message, MAJOR, MINOR, PATCH) == BumpType.MAJOR

    def test_keywords_are_case_insensitive(self):
        assert detect_keyword_release_type("add stuff", ["ADD"], [], []) == BumpType.MAJOR

    def test_no_match(self):
        assert detect_keyword_release_type("update readme", MAJOR, MINOR, ["hotfix"]) is None


class TestHigherPriority:
    """Tests for higher_priority()."""

    @pytest.mark.parametrize(
        ("current", "candidate", "expected"),
        [
            (None, BumpType.PATCH, BumpType.PATCH),
            (BumpType.PATCH, BumpType.MINOR, BumpType.MINOR),
            (BumpType.MINOR, BumpType.MAJOR, BumpType.MAJOR),
            (BumpType.MAJOR, BumpType.PATCH, BumpType.MAJOR),
            (BumpType.MINOR, BumpType.PATCH, BumpType.MINOR),
        ],
    )
    def test_priority(self, current, candidate, expected):
        assert higher_priority(current, candidate) == expected


class TestComputeReleaseType:
    """Tests for compute_release_type()."""

    def test_empty_messages_returns_none(self):
        assert compute_release_type([], CommitsConfig()) is None

    def test_no_votes_returns_none(self):
        """Messages that match no rule leave the decision to the caller."""
        config = CommitsConfig(mode="conventional-commits")
        assert compute_release_type(["update notes", "wip"], config) is None

    def test_keyword_mode(self):
        config = CommitsConfig()
        assert compute_release_type(["fix: bug", "feat: feature"], config) == BumpType.MINOR

    def test_conventional_mode(self):
        config = CommitsConfig(mode="conventional-commits")
        messages = ["feat: add login", "fix!: security patch", "not conventional"]
        assert compute_release_type(messages, config) == BumpType.MAJOR

    def test_major_vote_is_never_lowered(self):
        """Adding a major vote always yields a major result."""
        config = CommitsConfig(mode="conventional-commits")
        base = ["fix: a", "feat: b", "chore: c", "random text"]
        for i in range(len(base) + 1):
            messages = [*base[:i], "feat!: boom", *base[i:]]
            assert compute_release_type(messages, config) == BumpType.MAJOR

    def test_mode_selects_strategy(self):
        """The same message classifies differently per mode."""
        message = "feature: fancy"
        assert classify_message(message, CommitsConfig()) == BumpType.MINOR
        conventional = CommitsConfig(mode="conventional-commits")
        assert classify_message(message, conventional) == BumpType.PATCH
