from collections.abc import Callable, Iterator, Mapping
from pathlib import Path

import tree_sitter_javascript as tsjs
import tree_sitter_typescript as tsts
from tree_sitter import Language, Node, Parser, Tree

NodeHandler = Callable[[Node], None]


class TreeSitterParser:
    """Base class for the tree-sitter based barrel and import parsers."""

    def __init__(self) -> None:
        self._parsers: dict[str, Parser] = {}

    def _grammar_for(self, file_path: Path | None) -> str:
        """Pick the grammar for a file; TSX is the default for unknown paths."""
        if file_path is None:
            return "tsx"
        suffix = file_path.suffix
        if suffix == ".ts":
            return "typescript"
        if suffix in (".js", ".mjs", ".cjs"):
            return "javascript"
        return "tsx"

    def _get_parser(self, grammar: str) -> Parser:
        parser = self._parsers.get(grammar)
        if parser is None:
            if grammar == "typescript":
                language = Language(tsts.language_typescript())
            elif grammar == "javascript":
                language = Language(tsjs.language())
            else:
                language = Language(tsts.language_tsx())
            parser = Parser(language)
            self._parsers[grammar] = parser
        return parser

    def parse_tree(self, content: str, file_path: Path | None = None) -> Tree:
        """Parse content with the grammar matching the file extension."""
        parser = self._get_parser(self._grammar_for(file_path))
        return parser.parse(bytes(content, "utf8"))

    def extract_node_text(self, node: Node) -> str:
        """Extract text from tree-sitter node."""
        return node.text.decode("utf-8") if node.text is not None else ""

    def _has_syntax_errors(self, tree: Tree) -> bool:
        """Check if the parse tree contains ERROR or MISSING nodes."""
        return tree.root_node.has_error

    def _first_error_line(self, tree: Tree) -> int | None:
        """Return the 1-based line of the first ERROR/MISSING node, if any."""

        def find(node: Node) -> Node | None:
            if node.type == "ERROR" or node.is_missing:
                return node
            for child in node.children:
                if child.has_error or child.is_missing:
                    found = find(child)
                    if found is not None:
                        return found
            return None

        error_node = find(tree.root_node)
        return error_node.start_point[0] + 1 if error_node is not None else None

    def visit_top_level(self, root: Node, handlers: Mapping[str, NodeHandler]) -> None:
        """Dispatch each top-level statement to the handler for its node kind.

        Statements whose kind has no handler are ignored.
        """
        for child in root.named_children:
            handler = handlers.get(child.type)
            if handler is not None:
                handler(child)

    def _children_of_type(self, node: Node, node_type: str) -> Iterator[Node]:
        for child in node.named_children:
            if child.type == node_type:
                yield child

    def _string_value(self, node: Node) -> str:
        """Module source or export name without its quotes."""
        return self.extract_node_text(node).strip("\"'")
