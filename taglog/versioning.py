"""Semantic version parsing, ordering and increments for release tags.

Provides:
- Version: immutable, totally ordered semantic version
- parse_version(): lenient tag-name parser (``v`` prefix, short forms)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from functools import total_ordering

_VERSION_RE = re.compile(
    r"^v?(?P<major>\d+)"
    r"(?:\.(?P<minor>\d+))?"
    r"(?:\.(?P<patch>\d+))?"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


class InvalidVersionError(ValueError):
    """Raised when a string is not a semantic version."""

    pass


def _compare_prerelease(left: str, right: str) -> int:
    """Compare two prerelease strings using semver 2.0 precedence.

    An empty string means "no prerelease" and sorts above any prerelease.
    """
    if left == right:
        return 0
    if not left:
        return 1
    if not right:
        return -1

    left_parts = left.split(".")
    right_parts = right.split(".")
    for a, b in zip(left_parts, right_parts):
        if a == b:
            continue
        a_num, b_num = a.isdigit(), b.isdigit()
        if a_num and b_num:
            return -1 if int(a) < int(b) else 1
        if a_num:
            # Numeric identifiers have lower precedence than alphanumeric ones
            return -1
        if b_num:
            return 1
        return -1 if a < b else 1

    if len(left_parts) == len(right_parts):
        return 0
    return -1 if len(left_parts) < len(right_parts) else 1


@total_ordering
@dataclass(frozen=True)
class Version:
    """A parsed semantic version.

    Equality and ordering follow semver precedence, so build metadata is
    ignored when comparing. Use ``str()`` for the canonical rendering.
    """

    major: int
    minor: int = 0
    patch: int = 0
    prerelease: str = ""
    build: str = ""

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a tag name or version string.

        Args:
            text: Version text, e.g. ``v1.2.3``, ``1.2``, ``2.0.0-rc.1+build.5``

        Returns:
            Parsed Version

        Raises:
            InvalidVersionError: If the text is not a semantic version

        """
        match = _VERSION_RE.match(text.strip())
        if not match:
            raise InvalidVersionError(f"Invalid semantic version: {text!r}")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor") or 0),
            patch=int(match.group("patch") or 0),
            prerelease=match.group("prerelease") or "",
            build=match.group("build") or "",
        )

    def compare(self, other: Version) -> int:
        """Return -1, 0 or 1 as this version is lower, equal or greater."""
        mine = (self.major, self.minor, self.patch)
        theirs = (other.major, other.minor, other.patch)
        if mine != theirs:
            return -1 if mine < theirs else 1
        return _compare_prerelease(self.prerelease, other.prerelease)

    def __eq__(self, other: object) -> bool:
        """Compare by precedence, ignoring build metadata."""
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, self.prerelease))

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text

    def inc_major(self) -> Version:
        """Return the next major version (``1.4.2`` -> ``2.0.0``)."""
        return Version(self.major + 1)

    def inc_minor(self) -> Version:
        """Return the next minor version (``1.4.2`` -> ``1.5.0``)."""
        return Version(self.major, self.minor + 1)

    def inc_patch(self) -> Version:
        """Return the next patch version.

        A prerelease is promoted to its release instead of bumping the
        patch number (``1.4.2-rc.1`` -> ``1.4.2``).
        """
        if self.prerelease:
            return replace(self, prerelease="", build="")
        return Version(self.major, self.minor, self.patch + 1)


def parse_version(text: str) -> Version | None:
    """Parse a version, returning None instead of raising for invalid input."""
    try:
        return Version.parse(text)
    except InvalidVersionError:
        return None
