"""Tests for conventional-commit classification."""

from datetime import datetime

import pytest

from taglog.classifier import (
    BREAKING_CHANGES_GROUP,
    DEFAULT_RULES,
    CategoryRule,
    GroupedChanges,
    classify,
    group_commits,
    is_breaking,
)
from taglog.git import Commit


def make_commit(message: str, sha: str = "abc123") -> Commit:
    return Commit(hash=sha, message=message, author_date=datetime(2024, 1, 1))


class TestClassify:
    """Tests for classify."""

    def test_plain_feature(self) -> None:
        entry = classify(make_commit("feat: add export"))

        assert entry is not None
        assert entry.group == "✨ Features"
        assert entry.summary == "Add export"
        assert not entry.breaking

    def test_scope_is_lowercased_and_bold(self) -> None:
        entry = classify(make_commit("fix(Parser): handle empty input"))

        assert entry is not None
        assert entry.group == "🐛 Fixes"
        assert entry.summary == "(**parser**) Handle empty input"

    def test_breaking_marker_routes_to_breaking_block(self) -> None:
        entry = classify(make_commit("fix(parser)!: handle empty input"))

        assert entry is not None
        assert entry.breaking
        assert entry.group == BREAKING_CHANGES_GROUP
        assert entry.summary == "(**parser**) Handle empty input"

    def test_breaking_phrase_in_body(self) -> None:
        entry = classify(make_commit("refactor: drop legacy config\n\nBREAKING CHANGE: removed v1 keys"))

        assert entry is not None
        assert entry.breaking
        assert entry.summary == "Drop legacy config"

    def test_only_first_word_is_capitalized(self) -> None:
        entry = classify(make_commit("docs: explain iOS setup for macOS users"))

        assert entry is not None
        assert entry.summary == "Explain iOS setup for macOS users"

    def test_rest_of_first_word_is_unchanged(self) -> None:
        entry = classify(make_commit("feat: gRPC transport"))

        assert entry is not None
        assert entry.summary == "GRPC transport"

    def test_extra_whitespace_is_collapsed(self) -> None:
        entry = classify(make_commit("perf:   faster   startup  "))

        assert entry is not None
        assert entry.summary == "Faster startup"

    def test_only_title_is_used(self) -> None:
        entry = classify(make_commit("ci: pin runner\n\nlong explanation"))

        assert entry is not None
        assert entry.summary == "Pin runner"

    @pytest.mark.parametrize(
        "title",
        ["chore(release): bump version", "chore(ignore): regenerate lockfile"],
    )
    def test_skip_rules_drop_commit(self, title: str) -> None:
        assert classify(make_commit(title)) is None

    @pytest.mark.parametrize(
        "title",
        ["Merge branch 'main'", "update readme", "feature: not a type", "fix:missing space", "feat: "],
    )
    def test_non_conventional_titles_are_omitted(self, title: str) -> None:
        assert classify(make_commit(title)) is None

    @pytest.mark.parametrize(
        ("title", "group"),
        [
            ("build(deps): bump click", "⚙️ Dependencies"),
            ("build(deps-dev): bump pytest", "⚙️ Dev Dependencies"),
            ("build(docker): slim image", "🛠️ Build System"),
            ("chore: tidy", "Miscellaneous Tasks"),
            ("chore(repo): tidy", "Miscellaneous Tasks"),
            ("revert: undo cache", "↩️ Revert"),
            ("style: format", "Styling"),
            ("test: more cases", "🧪 Testing"),
        ],
    )
    def test_default_rule_groups(self, title: str, group: str) -> None:
        entry = classify(make_commit(title))

        assert entry is not None
        assert entry.group == group

    def test_fixed_scope_rule_has_no_scope_annotation(self) -> None:
        entry = classify(make_commit("build(deps): bump click from 8.0 to 8.1"))

        assert entry is not None
        assert entry.summary == "Bump click from 8.0 to 8.1"

    def test_first_matching_rule_wins(self) -> None:
        rules = [CategoryRule("feat", "First"), CategoryRule("feat", "Second")]

        entry = classify(make_commit("feat: overlap"), rules)

        assert entry is not None
        assert entry.group == "First"

    def test_rule_without_group_rejected(self) -> None:
        with pytest.raises(ValueError, match="needs a group"):
            CategoryRule("feat")


class TestIsBreaking:
    """Tests for breaking-change detection."""

    @pytest.mark.parametrize(
        "message",
        [
            "feat!: new api",
            "feat(core)!: new api",
            "fix: x\n\nBreaking-Change: old flag removed",
            "fix: x\n\nbreaking change: old flag removed",
        ],
    )
    def test_breaking(self, message: str) -> None:
        assert is_breaking(make_commit(message))

    def test_not_breaking(self) -> None:
        assert not is_breaking(make_commit("fix: mention breaking changes in docs"))


class TestGroupCommits:
    """Tests for grouping and display order."""

    def test_blocks_follow_rule_order_with_breaking_first(self) -> None:
        commits = [
            make_commit("docs: add guide", "1"),
            make_commit("fix: second fix", "2"),
            make_commit("feat!: remove v1 api", "3"),
            make_commit("fix: first fix", "4"),
            make_commit("chore(release): 1.0.0", "5"),
        ]

        blocks = group_commits(commits).blocks()

        assert blocks == [
            (BREAKING_CHANGES_GROUP, ["Remove v1 api"]),
            ("🐛 Fixes", ["Second fix", "First fix"]),
            ("📖 Documentation", ["Add guide"]),
        ]

    def test_empty(self) -> None:
        grouped = group_commits([make_commit("wip", "1"), make_commit("chore(ignore): x", "2")])

        assert grouped.is_empty()
        assert grouped.blocks() == []

    def test_shared_group_name_rendered_once(self) -> None:
        rules = [CategoryRule("feat", "Changes"), CategoryRule("fix", "Changes")]
        grouped = GroupedChanges(rules=rules)

        for message in ("feat: a", "fix: b"):
            entry = classify(make_commit(message), rules)
            assert entry is not None
            grouped.add(entry)

        assert grouped.blocks() == [("Changes", ["A", "B"])]

    def test_default_rules_declare_two_skip_rules(self) -> None:
        assert [rule.prefix for rule in DEFAULT_RULES if rule.skip] == [
            r"chore\(release\)",
            r"chore\(ignore\)",
        ]
