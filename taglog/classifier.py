"""Conventional-commit classification into changelog groups.

Rules are tried in declaration order and the first match wins. The order
also fixes the order in which non-empty groups are rendered.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .git import Commit

BREAKING_CHANGES_GROUP = "💥 Breaking Changes"
BREAKING_PHRASES = ("breaking change:", "breaking-change:")


@dataclass(frozen=True)
class CategoryRule:
    """A title-prefix rule.

    ``prefix`` is a regular expression for the commit type (and, where
    needed, a fixed scope) anchored at the start of the title. A skip rule
    drops matching commits from the changelog.
    """

    prefix: str
    group: str = ""
    skip: bool = False
    pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.skip and not self.group:
            raise ValueError(f"Rule {self.prefix!r} needs a group unless it is a skip rule")
        compiled = re.compile(
            rf"^{self.prefix}(?:\((?P<scope>[^)]*)\))?(?P<breaking>!)?:\s+(?=\S)"
        )
        object.__setattr__(self, "pattern", compiled)

    def match(self, title: str) -> re.Match[str] | None:
        return self.pattern.match(title)


DEFAULT_RULES: tuple[CategoryRule, ...] = (
    CategoryRule("feat", "✨ Features"),
    CategoryRule("fix", "🐛 Fixes"),
    CategoryRule("docs", "📖 Documentation"),
    CategoryRule("perf", "⚡️Performance"),
    CategoryRule("refactor", "✏️ Refactor"),
    CategoryRule("revert", "↩️ Revert"),
    CategoryRule("style", "Styling"),
    CategoryRule("test", "🧪 Testing"),
    CategoryRule(r"build\(deps\)", "⚙️ Dependencies"),
    CategoryRule(r"build\(deps-dev\)", "⚙️ Dev Dependencies"),
    CategoryRule("build", "🛠️ Build System"),
    CategoryRule("ci", "🔄 Continuous Integration"),
    CategoryRule(r"chore\(release\)", skip=True),
    CategoryRule(r"chore\(ignore\)", skip=True),
    CategoryRule("chore", "Miscellaneous Tasks"),
)


@dataclass(frozen=True)
class ClassifiedCommit:
    """A commit assigned to a group with its rendered summary line."""

    commit: Commit
    group: str
    summary: str
    breaking: bool


def is_breaking(commit: Commit) -> bool:
    """Check the title marker ``!:`` and the breaking-change message phrases."""
    if "!:" in commit.title:
        return True
    message = commit.message.lower()
    return any(phrase in message for phrase in BREAKING_PHRASES)


def _capitalize_first(word: str) -> str:
    # Only the leading letter changes so identifiers like "iOS" survive
    return word[:1].upper() + word[1:]


def classify(
    commit: Commit, rules: tuple[CategoryRule, ...] | list[CategoryRule] = DEFAULT_RULES
) -> ClassifiedCommit | None:
    """Classify one commit.

    Args:
        commit: Commit to classify
        rules: Ordered category rules

    Returns:
        ClassifiedCommit, or None if no rule matches or a skip rule matches

    """
    title = commit.title
    for rule in rules:
        match = rule.match(title)
        if match is None:
            continue
        if rule.skip:
            return None

        scope = match.group("scope")
        words = title[match.end() :].split()
        if words:
            words[0] = _capitalize_first(words[0])
        if scope:
            words.insert(0, f"(**{scope.lower()}**)")
        summary = " ".join(words).strip()

        breaking = is_breaking(commit)
        return ClassifiedCommit(
            commit=commit,
            group=BREAKING_CHANGES_GROUP if breaking else rule.group,
            summary=summary,
            breaking=breaking,
        )
    return None


@dataclass
class GroupedChanges:
    """Summary lines grouped for one changelog section."""

    rules: tuple[CategoryRule, ...] | list[CategoryRule] = DEFAULT_RULES
    breaking: list[str] = field(default_factory=list)
    groups: dict[str, list[str]] = field(default_factory=dict)

    def add(self, entry: ClassifiedCommit) -> None:
        if entry.breaking:
            self.breaking.append(entry.summary)
        else:
            self.groups.setdefault(entry.group, []).append(entry.summary)

    def is_empty(self) -> bool:
        return not self.breaking and not any(self.groups.values())

    def blocks(self) -> list[tuple[str, list[str]]]:
        """Return ``(heading, lines)`` pairs in display order.

        The breaking block comes first, then groups in rule order. Rules that
        share a group name render it once.
        """
        blocks: list[tuple[str, list[str]]] = []
        if self.breaking:
            blocks.append((BREAKING_CHANGES_GROUP, self.breaking))
        seen: set[str] = set()
        for rule in self.rules:
            if rule.skip or rule.group in seen:
                continue
            seen.add(rule.group)
            lines = self.groups.get(rule.group)
            if lines:
                blocks.append((rule.group, lines))
        return blocks


def group_commits(
    commits: list[Commit], rules: tuple[CategoryRule, ...] | list[CategoryRule] = DEFAULT_RULES
) -> GroupedChanges:
    """Classify commits in traversal order and group their summary lines."""
    grouped = GroupedChanges(rules=rules)
    for commit in commits:
        entry = classify(commit, rules)
        if entry is not None:
            grouped.add(entry)
    return grouped
