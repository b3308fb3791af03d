"""Shared fixtures for taglog unit tests."""

from datetime import datetime, timedelta

import pytest

from taglog.git import InMemoryRepository

_EPOCH = datetime(2024, 3, 1, 12, 0)


@pytest.fixture
def merge_repo() -> InMemoryRepository:
    """Repository with a feature branch merged back into main.

    a - b - c ------- f - g   (HEAD = g)
             \\       /
              d --- e
    """
    repo = InMemoryRepository()
    history = [
        ("a", "feat: initial import", []),
        ("b", "fix: crash on start", ["a"]),
        ("c", "docs: describe install", ["b"]),
        ("d", "feat(api): add endpoint", ["b"]),
        ("e", "test: cover endpoint", ["d"]),
        ("f", "Merge branch 'api'", ["c", "e"]),
        ("g", "perf: cache lookups", ["f"]),
    ]
    for day, (sha, message, parents) in enumerate(history):
        repo.add_commit(sha, message, parents, author_date=_EPOCH + timedelta(days=day))
    return repo
