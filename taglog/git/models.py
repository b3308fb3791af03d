"""Read-only records for the commit graph and tag references."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


class RepositoryError(Exception):
    """Raised when the repository cannot be read."""

    pass


@dataclass(frozen=True)
class Commit:
    """A commit record keyed by hash.

    Parents are stored as hashes, not as live references, so the graph is
    an arena addressed through the repository reader.
    """

    hash: str
    message: str
    author_date: datetime
    parents: tuple[str, ...] = field(default_factory=tuple)

    @property
    def title(self) -> str:
        """First line of the message."""
        return self.message.split("\n", 1)[0]


@dataclass(frozen=True)
class TagRef:
    """A tag name bound to the object it points at.

    ``target`` is a commit hash for lightweight tags and a tag-object hash
    for annotated tags.
    """

    name: str
    target: str
