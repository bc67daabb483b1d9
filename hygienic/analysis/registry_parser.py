"""Component registry built from barrel module exports.

A barrel module re-exports the UI components from one import path::

    export { Button } from './button';
    export { Input as TextInput } from './input';
    export { default as Card } from './card';

Every specifier contributes its exported (public) name, here ``Button``,
``TextInput`` and ``Card``.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from tree_sitter import Node

from ..consolidator_logging import get_logger
from ..exceptions import RegistryLoadError
from .base_parsers import TreeSitterParser

logger = get_logger()


@dataclass(frozen=True)
class BarrelParseOutcome:
    """Names exported by one barrel file, or the reason it was unusable."""

    barrel_path: str
    names: frozenset[str] = field(default_factory=frozenset)
    error: RegistryLoadError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BarrelParser(TreeSitterParser):
    """Extract exported component names from barrel modules."""

    def parse_barrel_source(self, content: str, file_path: Path | None = None) -> set[str]:
        """Return exported names of already-read barrel source.

        Raises:
            RegistryLoadError: If the source has syntax errors.
        """
        tree = self.parse_tree(content, file_path)
        if self._has_syntax_errors(tree):
            line = self._first_error_line(tree)
            raise RegistryLoadError(
                file_path or "<source>", f"syntax error near line {line}"
            )

        names: set[str] = set()

        def on_export(node: Node) -> None:
            for clause in self._children_of_type(node, "export_clause"):
                for specifier in self._children_of_type(clause, "export_specifier"):
                    name = self._exported_name(specifier)
                    if name:
                        names.add(name)

        self.visit_top_level(tree.root_node, {"export_statement": on_export})
        return names

    def parse_barrel_file(self, barrel_path: Path | str) -> BarrelParseOutcome:
        """Read and parse one barrel file without raising."""
        path = Path(barrel_path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return BarrelParseOutcome(
                barrel_path=str(path), error=RegistryLoadError(path, str(e))
            )

        try:
            names = self.parse_barrel_source(content, path)
        except RegistryLoadError as e:
            return BarrelParseOutcome(barrel_path=str(path), error=e)

        return BarrelParseOutcome(barrel_path=str(path), names=frozenset(names))

    def _exported_name(self, specifier: Node) -> str | None:
        # `export { Y as X }` exports X; `export { X }` exports X
        target = specifier.child_by_field_name("alias") or specifier.child_by_field_name(
            "name"
        )
        if target is None:
            return None
        name = self._string_value(target)
        if not name or name == "default":
            return None
        return name


def load_registry(
    barrel_paths: Iterable[Path | str],
    extra_names: Iterable[str] = (),
    parser: BarrelParser | None = None,
) -> frozenset[str]:
    """Build the component registry for one run.

    Unreadable or malformed barrels are logged and skipped; they never fail
    the run. The result is the union of every barrel's exports and
    ``extra_names``.
    """
    parser = parser or BarrelParser()
    components: set[str] = set()

    for barrel_path in barrel_paths:
        path = Path(barrel_path)
        if not path.is_file():
            logger.debug(f"Barrel file not found, skipping: {path}")
            continue

        outcome = parser.parse_barrel_file(path)
        if not outcome.ok:
            logger.warning(f"Warning: {outcome.error}")
            continue

        logger.debug(f"Loaded {len(outcome.names)} components from {path}")
        components.update(outcome.names)

    components.update(name for name in extra_names if name)
    return frozenset(components)
