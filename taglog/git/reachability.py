"""Breadth-first reachability queries over the commit graph.

Provides:
- is_ancestor(): inclusive ancestor test with early exit
- commits_reachable_from(): full ancestor set of a commit
- commits_in_range(): commits reachable from a newer boundary but not an older one

Traversal follows parent edges only and keeps a visited set keyed by commit
hash, so shared history behind merges is walked once.
"""

import logging
from collections import deque
from collections.abc import Iterator

from .models import Commit
from .repository import RepositoryReader

logger = logging.getLogger(__name__)


def walk(
    repo: RepositoryReader,
    start: Commit,
    exclude: frozenset[str] | set[str] = frozenset(),
) -> Iterator[Commit]:
    """Yield commits breadth-first from ``start`` following parent edges.

    Each commit is yielded once, the first time it is dequeued. Commits in
    ``exclude`` are neither yielded nor expanded; since an exclusion set built
    by commits_reachable_from() is closed under parents, nothing behind an
    excluded commit is lost.

    Args:
        repo: Repository reader used to resolve parent hashes
        start: Commit to start from
        exclude: Hashes to stop at

    Yields:
        Commits in FIFO traversal order (newest boundary first)

    Raises:
        RepositoryError: If a parent commit cannot be read

    """
    if start.hash in exclude:
        return

    visited: set[str] = {start.hash}
    queue: deque[Commit] = deque([start])
    while queue:
        commit = queue.popleft()
        yield commit
        for parent_hash in commit.parents:
            if parent_hash in visited or parent_hash in exclude:
                continue
            visited.add(parent_hash)
            queue.append(repo.commit(parent_hash))


def is_ancestor(repo: RepositoryReader, candidate: Commit, descendant: Commit) -> bool:
    """Check whether ``candidate`` is reachable from ``descendant``.

    A commit counts as its own ancestor.

    Args:
        repo: Repository reader
        candidate: Possible ancestor
        descendant: Commit to walk back from

    Returns:
        True if ``candidate`` is ``descendant`` or one of its ancestors

    """
    if candidate.hash == descendant.hash:
        return True
    for commit in walk(repo, descendant):
        if commit.hash == candidate.hash:
            return True
    return False


def commits_reachable_from(repo: RepositoryReader, start: Commit) -> set[str]:
    """Return the hashes of ``start`` and every commit behind it."""
    return {commit.hash for commit in walk(repo, start)}


def commits_in_range(
    repo: RepositoryReader,
    older: Commit | None,
    newer: Commit | None = None,
) -> list[Commit]:
    """Return the commits introduced after ``older`` up to ``newer``.

    Commits reachable from both boundaries (shared history, merge bases) are
    excluded, so adjacent ranges never share a commit.

    Args:
        repo: Repository reader
        older: Older boundary, or None to take the whole history
        newer: Newer boundary, or None for the branch tip

    Returns:
        Commits in breadth-first order from ``newer``, newest first

    """
    until = newer if newer is not None else repo.commit(repo.head())
    excluded = commits_reachable_from(repo, older) if older is not None else set()

    commits = list(walk(repo, until, exclude=excluded))
    logger.debug(
        f"Range {older.hash[:12] if older else '<root>'}..{until.hash[:12]}: "
        f"{len(commits)} commits"
    )
    return commits
