"""Shared constants for taglog configuration."""

from taglog.unreleased import DEFAULT_UNRELEASED_TAG

CONFIG_FILE_NAME: str = ".taglog.yaml"
ENV_PREFIX: str = "TAGLOG_"
MAX_RENDER_WIDTH: int = 120
DEFAULT_RENDER_WIDTH: int = 80

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_RENDER_WIDTH",
    "DEFAULT_UNRELEASED_TAG",
    "ENV_PREFIX",
    "MAX_RENDER_WIDTH",
]
