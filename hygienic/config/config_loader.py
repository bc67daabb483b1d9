"""JSON configuration loading and persistence."""

import json
from typing import Any

from pydantic import ValidationError

from ..consolidator_logging import get_logger
from ..storage.atomic import atomic_write_text
from .models import ConsolidatorConfig
from .paths import ConfigPaths

logger = get_logger()


class ConfigLoader:
    """Load and persist ``config.json`` under the configured directory."""

    def __init__(self, paths: ConfigPaths):
        self.paths = paths
        self._config: ConsolidatorConfig | None = None

    @property
    def config(self) -> ConsolidatorConfig:
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> ConsolidatorConfig:
        """Load configuration merged over defaults.

        A missing, unreadable or invalid file falls back to the defaults,
        which are written back so the user has a file to edit.
        """
        self.paths.ensure_directories()
        config_file = self.paths.config_file

        try:
            with open(config_file, encoding="utf-8") as f:
                loaded = json.load(f)
            if not isinstance(loaded, dict):
                raise ValueError("config root must be an object")
            defaults = ConsolidatorConfig().model_dump()
            config = ConsolidatorConfig(**{**defaults, **loaded})
            logger.debug(f"Loaded configuration from {config_file}")
        except FileNotFoundError:
            config = ConsolidatorConfig()
            self._write(config)
            logger.debug(f"Created default configuration at {config_file}")
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"Invalid configuration in {config_file}, using defaults: {e}")
            config = ConsolidatorConfig()
            self._write(config)

        self._config = config
        return config

    def save(self, config: ConsolidatorConfig | None = None) -> None:
        if config is not None:
            self._config = config
        self._write(self.config)

    def set(self, key: str, value: Any) -> ConsolidatorConfig:
        """Validate and persist a single setting.

        Raises:
            KeyError: If ``key`` is not a configuration field.
            pydantic.ValidationError: If ``value`` is invalid for ``key``.
        """
        if key not in ConsolidatorConfig.model_fields:
            raise KeyError(f"Unknown configuration key: {key}")
        data = self.config.model_dump()
        data[key] = value
        updated = ConsolidatorConfig(**data)
        self.save(updated)
        return updated

    def _write(self, config: ConsolidatorConfig) -> None:
        atomic_write_text(
            self.paths.config_file, json.dumps(config.model_dump(), indent=2)
        )


def load_config(paths: ConfigPaths | None = None) -> ConsolidatorConfig:
    """Load configuration from ``paths`` (default: home directory)."""
    return ConfigLoader(paths or ConfigPaths.from_home()).load()
