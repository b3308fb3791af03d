"""Changelog assembly from release tags and the commit graph.

Sections are computed oldest to newest, one per pair of consecutive release
tags, and prepended so the document reads newest first. Commits after the
newest release form an extra unreleased section at the top.

Example:
    repo = GitRepository(".")
    text = generate_changelog(repo, EngineConfig(unreleased=UnreleasedConfig(inc_minor=True)))

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from .classifier import DEFAULT_RULES, CategoryRule, GroupedChanges, group_commits
from .git import Commit, RepositoryReader, commits_in_range
from .tags import ReleaseTag, release_tags
from .unreleased import (
    InvalidUnreleasedTagError,
    UnreleasedConfig,
    UnreleasedHeading,
    resolve_unreleased,
)

logger = logging.getLogger(__name__)

CHANGELOG_TITLE = "# Changelog\n"


class ChangelogError(Exception):
    """Raised when the changelog cannot be generated."""

    pass


@dataclass(frozen=True)
class EngineConfig:
    """What to generate, independent of where the repository comes from."""

    unreleased_only: bool = False
    unreleased: UnreleasedConfig = field(default_factory=UnreleasedConfig)


@dataclass
class ChangelogSection:
    """One release (or the unreleased work) with its grouped changes."""

    heading: str
    changes: GroupedChanges

    def render_body(self) -> str:
        body = ""
        for heading, lines in self.changes.blocks():
            body += f"\n### {heading}\n\n"
            body += "".join(f"- {line}\n" for line in lines)
        return body

    def render(self) -> str:
        return f"{self.heading}\n{self.render_body()}"


@dataclass
class Changelog:
    """Sections ordered newest first."""

    sections: list[ChangelogSection] = field(default_factory=list)

    def render(self) -> str:
        return "\n".join([CHANGELOG_TITLE] + [section.render() for section in self.sections])


def release_heading(release: ReleaseTag) -> str:
    """Heading for a tagged release, dated by its commit's author date."""
    return f"## [{release.version}] - {release.commit.author_date.date().isoformat()}"


class ChangelogBuilder:
    """Assemble a changelog from a repository reader."""

    def __init__(
        self,
        repo: RepositoryReader,
        config: EngineConfig | None = None,
        rules: tuple[CategoryRule, ...] | list[CategoryRule] = DEFAULT_RULES,
        today: date | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            repo: Repository reader; only read operations are used
            config: Generation options (defaults to full history)
            rules: Ordered category rules
            today: Date for versioned unreleased headings (defaults to today)

        """
        self.repo = repo
        self.config = config or EngineConfig()
        self.rules = rules
        self.today = today

    def _changes(self, older: Commit | None, newer: Commit | None) -> GroupedChanges:
        return group_commits(commits_in_range(self.repo, older, newer), self.rules)

    def _unreleased_heading(self, latest: ReleaseTag) -> UnreleasedHeading:
        try:
            return resolve_unreleased(latest.version, self.config.unreleased, self.today)
        except InvalidUnreleasedTagError as e:
            raise ChangelogError(str(e)) from e

    def unreleased_section(self, latest: ReleaseTag) -> ChangelogSection | None:
        """Section for commits after ``latest`` up to the branch tip.

        Returns:
            The section, or None when no commit in the range is classified

        """
        heading = self._unreleased_heading(latest)
        changes = self._changes(latest.commit, None)
        if changes.is_empty():
            logger.debug(f"No unreleased changes since {latest.name}")
            return None
        return ChangelogSection(heading=heading.render(), changes=changes)

    def build(self) -> Changelog:
        """Build the changelog.

        Raises:
            RepositoryError: If the repository cannot be read
            ChangelogError: If the unreleased tag override is invalid

        """
        tip = self.repo.commit(self.repo.head())
        releases = release_tags(self.repo, tip)
        logger.debug(f"{len(releases)} release tags reachable from {tip.hash[:12]}")

        if not releases:
            return Changelog()

        latest = releases[-1]
        if self.config.unreleased_only:
            section = self.unreleased_section(latest)
            return Changelog([section] if section else [])

        sections: list[ChangelogSection] = []
        previous: ReleaseTag | None = None
        for release in releases:
            changes = self._changes(previous.commit if previous else None, release.commit)
            sections.insert(
                0, ChangelogSection(release_heading(release), changes)
            )
            previous = release

        unreleased = self.unreleased_section(latest)
        if unreleased is not None:
            sections.insert(0, unreleased)
        return Changelog(sections)


def generate_changelog(
    repo: RepositoryReader,
    config: EngineConfig | None = None,
    today: date | None = None,
) -> str:
    """Build and render a changelog in one call."""
    return ChangelogBuilder(repo, config, today=today).build().render()
