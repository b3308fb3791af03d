"""Pydantic models for taglog configuration."""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from taglog.changelog import EngineConfig
from taglog.unreleased import DEFAULT_UNRELEASED_TAG, UnreleasedConfig


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


class ChangelogOptions(BaseModel):
    """Resolved options for one changelog run.

    Field names match the command-line flags with ``-`` replaced by ``_``.
    """

    repo: Path = Field(default_factory=Path.cwd, description="Path to git repository")
    output: Path | None = Field(default=None, description="File to write instead of stdout")
    unreleased: bool = Field(default=False, description="Only generate unreleased changes")
    tag: str = Field(default=DEFAULT_UNRELEASED_TAG, description="Unreleased version label")
    inc_major: bool = False
    inc_minor: bool = False
    inc_patch: bool = False
    style: Literal["auto", "plain"] = "auto"

    @field_validator("tag", mode="before")
    @classmethod
    def validate_tag(cls, v: Any) -> Any:
        """Stringify numeric labels and reject empty ones."""
        # YAML reads bare versions such as 3.0 as numbers
        if isinstance(v, (int, float)):
            v = str(v)
        if isinstance(v, str):
            if not v.strip():
                raise ValueError("Unreleased tag cannot be empty")
            return v.strip()
        return v

    def engine_config(self) -> EngineConfig:
        """Project the options the changelog engine needs."""
        return EngineConfig(
            unreleased_only=self.unreleased,
            unreleased=UnreleasedConfig(
                inc_major=self.inc_major,
                inc_minor=self.inc_minor,
                inc_patch=self.inc_patch,
                tag=self.tag,
            ),
        )
