"""Tree-sitter based parsing of barrel modules and component imports."""

from .base_parsers import TreeSitterParser
from .import_scanner import ImportMatch, ImportScanner
from .registry_parser import BarrelParseOutcome, BarrelParser, load_registry

__all__ = [
    "TreeSitterParser",
    "ImportMatch",
    "ImportScanner",
    "BarrelParseOutcome",
    "BarrelParser",
    "load_registry",
]
