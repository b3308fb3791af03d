"""Repository access and commit-graph traversal."""

from .models import Commit, RepositoryError, TagRef
from .reachability import commits_in_range, commits_reachable_from, is_ancestor, walk
from .repository import GitRepository, InMemoryRepository, RepositoryReader

__all__ = [
    "Commit",
    "GitRepository",
    "InMemoryRepository",
    "RepositoryError",
    "RepositoryReader",
    "TagRef",
    "commits_in_range",
    "commits_reachable_from",
    "is_ancestor",
    "walk",
]
