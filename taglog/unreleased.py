"""Heading resolution for commits that are not yet tagged."""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum

from .versioning import Version, parse_version

logger = logging.getLogger(__name__)

DEFAULT_UNRELEASED_TAG = "unreleased"


class UnreleasedSource(str, Enum):
    """Which input decided the unreleased heading."""

    INC_MAJOR = "inc_major"
    INC_MINOR = "inc_minor"
    INC_PATCH = "inc_patch"
    EXPLICIT_TAG = "explicit_tag"
    LABEL = "label"


class InvalidUnreleasedTagError(ValueError):
    """Raised when an override tag is neither the default label nor a version."""

    pass


@dataclass(frozen=True)
class UnreleasedConfig:
    """Inputs that decide the unreleased heading."""

    inc_major: bool = False
    inc_minor: bool = False
    inc_patch: bool = False
    tag: str = DEFAULT_UNRELEASED_TAG


@dataclass(frozen=True)
class UnreleasedHeading:
    """Resolved label and optional date for the unreleased section."""

    label: str
    source: UnreleasedSource
    release_date: date | None = None
    version: Version | None = None

    def render(self) -> str:
        if self.release_date is None:
            return f"## [{self.label}]"
        return f"## [{self.label}] - {self.release_date.isoformat()}"


def resolve_unreleased(
    latest: Version | None,
    config: UnreleasedConfig,
    today: date | None = None,
) -> UnreleasedHeading:
    """Resolve the unreleased heading.

    Priority: major increment, minor increment, patch increment, explicit
    version tag, plain label. Increments start from ``0.0.0`` when there is
    no release yet.

    Args:
        latest: Most recent release reachable from the branch tip
        config: Increment flags and override tag
        today: Date stamped on versioned headings (defaults to today)

    Returns:
        UnreleasedHeading

    Raises:
        InvalidUnreleasedTagError: If ``config.tag`` is not the default label
            and does not parse as a version

    """
    today = today or date.today()
    base = latest if latest is not None else Version(0)

    if config.inc_major:
        version = base.inc_major()
        return UnreleasedHeading(str(version), UnreleasedSource.INC_MAJOR, today, version)
    if config.inc_minor:
        version = base.inc_minor()
        return UnreleasedHeading(str(version), UnreleasedSource.INC_MINOR, today, version)
    if config.inc_patch:
        version = base.inc_patch()
        return UnreleasedHeading(str(version), UnreleasedSource.INC_PATCH, today, version)

    if config.tag == DEFAULT_UNRELEASED_TAG:
        return UnreleasedHeading(config.tag, UnreleasedSource.LABEL)

    version = parse_version(config.tag)
    if version is None:
        raise InvalidUnreleasedTagError(
            f"Unreleased tag {config.tag!r} is not a semantic version"
        )
    if latest is not None:
        if version < latest:
            logger.warning(
                f"Unreleased tag {str(version)!r} is lower than existing tag "
                f"{str(latest)!r} in the repository."
            )
        elif version == latest:
            logger.warning(f"Unreleased tag {str(version)!r} already exists in the repository.")
    return UnreleasedHeading(str(version), UnreleasedSource.EXPLICIT_TAG, today, version)
