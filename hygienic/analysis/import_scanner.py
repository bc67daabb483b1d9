"""Find imports of registry components from barrel sub-paths."""

from dataclasses import dataclass, field
from pathlib import Path

from tree_sitter import Node

from ..exceptions import ParseError
from .base_parsers import TreeSitterParser


@dataclass
class ImportMatch:
    """One qualifying import declaration.

    Attributes:
        module_path: Module source string, e.g. ``@/shared/components/ui/button``.
        names: Local binding names found in the registry, unique, in binding order.
        line_numbers: 1-based lines occupied by the declaration.
    """

    module_path: str
    names: list[str] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)

    def add_name(self, name: str) -> None:
        if name not in self.names:
            self.names.append(name)

    def render(self) -> str:
        """Render as a named import with sorted names, for reports."""
        return f"import {{ {', '.join(sorted(self.names))} }} from '{self.module_path}';"


class ImportScanner(TreeSitterParser):
    """Scan TS/TSX sources for imports that can move to the barrel root."""

    def scan(
        self,
        content: str,
        registry: frozenset[str] | set[str],
        barrel_root: str,
        file_path: Path | None = None,
    ) -> tuple[list[ImportMatch], str]:
        """Return qualifying import declarations in declaration order.

        A declaration qualifies when its source is a sub-path of
        ``barrel_root`` and at least one binding resolves into ``registry``.
        Named bindings are looked up by imported name and recorded by local
        name; default bindings are looked up and recorded by local name.
        Declarations that import types (`import type` or a `type` specifier)
        are left alone so type-only imports stay type-only.

        Raises:
            ParseError: If the content has syntax errors.
        """
        tree = self.parse_tree(content, file_path)
        if self._has_syntax_errors(tree):
            line = self._first_error_line(tree)
            raise ParseError(file_path, f"syntax error near line {line}")

        prefix = barrel_root.rstrip("/") + "/"
        matches: list[ImportMatch] = []

        def on_import(node: Node) -> None:
            source = node.child_by_field_name("source")
            if source is None or self._mentions_types(node):
                return
            module_path = self._string_value(source)
            if not module_path.startswith(prefix):
                return

            match = ImportMatch(module_path=module_path)
            for clause in self._children_of_type(node, "import_clause"):
                self._collect_bindings(clause, registry, match)

            if match.names:
                match.line_numbers = self._occupied_lines(node)
                matches.append(match)

        self.visit_top_level(tree.root_node, {"import_statement": on_import})
        return matches, content

    def scan_file(
        self,
        file_path: Path,
        registry: frozenset[str] | set[str],
        barrel_root: str,
    ) -> tuple[list[ImportMatch], str]:
        """Read ``file_path`` and scan it.

        Newlines are read untranslated so the rewrite can reproduce the
        original bytes.
        """
        with open(file_path, encoding="utf-8", newline="") as f:
            content = f.read()
        return self.scan(content, registry, barrel_root, file_path)

    def _collect_bindings(
        self, clause: Node, registry: frozenset[str] | set[str], match: ImportMatch
    ) -> None:
        for child in clause.named_children:
            if child.type == "identifier":
                local_name = self.extract_node_text(child)
                if local_name in registry:
                    match.add_name(local_name)
            elif child.type == "named_imports":
                for specifier in self._children_of_type(child, "import_specifier"):
                    name_node = specifier.child_by_field_name("name")
                    if name_node is None:
                        continue
                    imported = self._string_value(name_node)
                    if imported not in registry:
                        continue
                    alias_node = specifier.child_by_field_name("alias")
                    local_name = (
                        self.extract_node_text(alias_node) if alias_node else imported
                    )
                    match.add_name(local_name)

    def _mentions_types(self, node: Node) -> bool:
        """True for `import type ...` and for declarations with a `{ type X }` specifier."""
        def has_type_keyword(n: Node) -> bool:
            return any(child.type == "type" and not child.is_named for child in n.children)

        if has_type_keyword(node):
            return True
        for clause in self._children_of_type(node, "import_clause"):
            for named in self._children_of_type(clause, "named_imports"):
                if any(
                    has_type_keyword(specifier)
                    for specifier in self._children_of_type(named, "import_specifier")
                ):
                    return True
        return False

    def _occupied_lines(self, node: Node) -> list[int]:
        start_row = node.start_point[0]
        end_row = start_row
        # zero-width children (automatic semicolons) can sit past the line end
        for child in reversed(node.children):
            if child.end_byte > child.start_byte:
                end_row = child.end_point[0]
                break
        return list(range(start_row + 1, max(start_row, end_row) + 2))
