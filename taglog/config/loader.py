"""Configuration loader for taglog.

Options are merged from four levels, lowest priority first:
    built-in defaults < YAML config file < TAGLOG_* environment < CLI flags
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .constants import CONFIG_FILE_NAME, ENV_PREFIX
from .models import ChangelogOptions, ConfigurationError

logger = logging.getLogger(__name__)


def _normalize_key(key: str) -> str:
    return key.strip().lower().replace("-", "_")


def _merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge two flat option dictionaries.

    Values in override take precedence. None values never override.

    Args:
        base: Base dictionary
        override: Override dictionary (values take precedence)

    Returns:
        Merged dictionary

    """
    result = base.copy()
    for key, value in override.items():
        if value is None:
            continue
        result[_normalize_key(key)] = value
    return result


class ConfigLoader:
    """Load and merge taglog options.

    Example:
        loader = ConfigLoader(config_file=Path("ci/taglog.yaml"))
        options = loader.load({"inc_minor": True})

    """

    def __init__(
        self,
        config_file: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
        home: Path | None = None,
    ) -> None:
        """Initialize the ConfigLoader.

        Args:
            config_file: Explicit config file; must exist when given
            environ: Environment mapping (defaults to os.environ)
            home: Directory searched for the default config file (defaults to ~)

        """
        self.config_file = Path(config_file) if config_file is not None else None
        self.environ = environ if environ is not None else os.environ
        self.home = home if home is not None else Path.home()

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        """Load a YAML mapping.

        Raises:
            ConfigurationError: If file cannot be read or parsed

        """
        try:
            with open(path, encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigurationError(f"Configuration file not found: {path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}")
        except PermissionError:
            raise ConfigurationError(f"Permission denied reading: {path}")

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigurationError(f"Expected a mapping at the top of {path}")
        return {_normalize_key(str(k)): v for k, v in content.items()}

    def config_path(self) -> Path | None:
        """Return the config file in effect, or None if there is none."""
        if self.config_file is not None:
            return self.config_file
        default = self.home / CONFIG_FILE_NAME
        return default if default.is_file() else None

    def load_file(self) -> dict[str, Any]:
        path = self.config_path()
        if path is None:
            return {}
        data = self._load_yaml(path)
        logger.debug(f"Loaded config file: {path}")
        return data

    def load_env(self) -> dict[str, str]:
        """Collect ``TAGLOG_*`` variables for known option names."""
        known = set(ChangelogOptions.model_fields)
        values = {}
        for name, value in self.environ.items():
            if not name.startswith(ENV_PREFIX):
                continue
            key = _normalize_key(name[len(ENV_PREFIX) :])
            if key in known:
                values[key] = value
        return values

    def load(self, overrides: Mapping[str, Any] | None = None) -> ChangelogOptions:
        """Merge all sources into validated options.

        Args:
            overrides: Explicit values (CLI flags); None entries are ignored

        Returns:
            ChangelogOptions

        Raises:
            ConfigurationError: If a source is unreadable or a value is invalid

        """
        data = _merge({}, self.load_file())
        data = _merge(data, self.load_env())
        data = _merge(data, overrides or {})

        unknown = sorted(set(data) - set(ChangelogOptions.model_fields))
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")
            for key in unknown:
                del data[key]

        try:
            return ChangelogOptions(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
