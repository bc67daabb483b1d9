"""Configuration package.

Configuration lives in ``config.json`` inside an explicitly constructed
``ConfigPaths`` directory (default ``~/.config/import-consolidator``).
Missing keys take their defaults from ``ConsolidatorConfig``.
"""

from .config_loader import ConfigLoader, load_config
from .models import DEFAULT_BARREL_ROOT, ConsolidatorConfig
from .paths import ConfigPaths

__all__ = [
    "ConfigLoader",
    "ConfigPaths",
    "ConsolidatorConfig",
    "DEFAULT_BARREL_ROOT",
    "load_config",
]
