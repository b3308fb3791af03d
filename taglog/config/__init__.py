"""Configuration loading for taglog.

Example:
    from taglog.config import ConfigLoader

    options = ConfigLoader().load({"unreleased": True})
    config = options.engine_config()

"""

from .constants import (
    CONFIG_FILE_NAME,
    DEFAULT_RENDER_WIDTH,
    DEFAULT_UNRELEASED_TAG,
    ENV_PREFIX,
    MAX_RENDER_WIDTH,
)
from .loader import ConfigLoader
from .models import ChangelogOptions, ConfigurationError

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_RENDER_WIDTH",
    "DEFAULT_UNRELEASED_TAG",
    "ENV_PREFIX",
    "MAX_RENDER_WIDTH",
    "ChangelogOptions",
    "ConfigLoader",
    "ConfigurationError",
]
