"""Release tag discovery and branch filtering."""

import logging
from dataclasses import dataclass

from .git import Commit, RepositoryReader, TagRef, is_ancestor
from .versioning import Version, parse_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReleaseTag:
    """A tag whose name parses as a version, with its resolved commit."""

    tag: TagRef
    version: Version
    commit: Commit

    @property
    def name(self) -> str:
        return self.tag.name


def collect_version_tags(repo: RepositoryReader) -> list[ReleaseTag]:
    """Return every tag that names a version, sorted ascending by version.

    Tags that do not parse as versions are dropped silently. Two tags that
    normalize to the same version string collapse into the last one seen.

    Raises:
        RepositoryError: If tags cannot be listed or a tag target is unreadable

    """
    by_version: dict[str, tuple[TagRef, Version]] = {}
    for tag in repo.tags():
        version = parse_version(tag.name)
        if version is None:
            logger.debug(f"Ignoring non-version tag {tag.name!r}")
            continue
        by_version[str(version)] = (tag, version)

    releases = [
        ReleaseTag(tag=tag, version=version, commit=repo.tag_commit(tag))
        for tag, version in by_version.values()
    ]
    releases.sort(key=lambda release: release.version)
    return releases


def filter_ancestor_tags(
    repo: RepositoryReader, releases: list[ReleaseTag], tip: Commit
) -> list[ReleaseTag]:
    """Keep only releases whose commit is an ancestor of (or equal to) ``tip``.

    Tags from release lines that diverged from the current branch are
    dropped with a warning.

    Args:
        repo: Repository reader
        releases: Candidate release tags
        tip: Branch tip commit

    Returns:
        Surviving releases sorted ascending by version

    """
    kept = []
    for release in releases:
        if is_ancestor(repo, release.commit, tip):
            kept.append(release)
        else:
            logger.warning(
                f"Skipping tag {release.name!r}: commit {release.commit.hash[:12]} "
                f"is not an ancestor of {tip.hash[:12]}"
            )
    kept.sort(key=lambda release: release.version)
    return kept


def release_tags(repo: RepositoryReader, tip: Commit) -> list[ReleaseTag]:
    """Return the version tags reachable from ``tip``, oldest first."""
    return filter_ancestor_tags(repo, collect_version_tags(repo), tip)
