"""Hygienic: consolidate UI component imports into a single barrel import."""

__version__ = "0.0.1"

from .analysis import BarrelParser, ImportMatch, ImportScanner, load_registry
from .config import ConfigLoader, ConfigPaths, ConsolidatorConfig
from .consolidation import ConsolidationResult, ImportConsolidator, rewrite
from .exceptions import ConsolidatorError, FileWriteError, ParseError, RegistryLoadError

__all__ = [
    "__version__",
    "BarrelParser",
    "ImportMatch",
    "ImportScanner",
    "load_registry",
    "ConfigLoader",
    "ConfigPaths",
    "ConsolidatorConfig",
    "ConsolidationResult",
    "ImportConsolidator",
    "rewrite",
    "ConsolidatorError",
    "FileWriteError",
    "ParseError",
    "RegistryLoadError",
]
