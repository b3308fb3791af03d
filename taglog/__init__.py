"""taglog - changelog generation from git tags and conventional commits.

This package builds a markdown changelog from a repository's release tags,
grouping the commits between releases by their conventional-commit type.
"""

__version__ = "0.1.0"

__all__ = [
    "changelog",
    "classifier",
    "cli",
    "config",
    "git",
    "tags",
    "unreleased",
    "versioning",
]
