"""Unit tests for barrel export parsing and registry construction."""

from pathlib import Path

import pytest

from hygienic.analysis import BarrelParser, load_registry
from hygienic.exceptions import RegistryLoadError


@pytest.fixture()
def parser() -> BarrelParser:
    return BarrelParser()


class TestParseBarrelSource:
    """Tests for extracting exported names from barrel source."""

    def test_named_reexports(self, parser: BarrelParser) -> None:
        """Each specifier contributes its exported name."""
        source = (
            "export { Button } from './button';\n"
            "export { Input, Textarea } from './input';\n"
        )
        assert parser.parse_barrel_source(source) == {"Button", "Input", "Textarea"}

    def test_alias_exports_public_name(self, parser: BarrelParser) -> None:
        """`export { A as B }` registers B, not A."""
        source = "export { Input as TextInput } from './input';\n"
        assert parser.parse_barrel_source(source) == {"TextInput"}

    def test_default_reexport_under_name(self, parser: BarrelParser) -> None:
        """`export { default as Card }` registers Card."""
        source = "export { default as Card } from './card';\n"
        assert parser.parse_barrel_source(source) == {"Card"}

    def test_star_and_declaration_exports_ignored(self, parser: BarrelParser) -> None:
        """Only export specifiers contribute names."""
        source = (
            "export * from './icons';\n"
            "export const VERSION = '1.0';\n"
            "export function helper() {}\n"
            "export { Badge } from './badge';\n"
        )
        assert parser.parse_barrel_source(source) == {"Badge"}

    def test_local_export_clause(self, parser: BarrelParser) -> None:
        """Export clauses without a source also count."""
        source = "const Spinner = () => null;\nexport { Spinner };\n"
        assert parser.parse_barrel_source(source) == {"Spinner"}

    def test_empty_source(self, parser: BarrelParser) -> None:
        assert parser.parse_barrel_source("") == set()

    def test_syntax_error_raises(self, parser: BarrelParser) -> None:
        """Malformed barrels raise RegistryLoadError."""
        with pytest.raises(RegistryLoadError):
            parser.parse_barrel_source("export { Button from './button';\n")


class TestParseBarrelFile:
    """Tests for the non-raising file variant."""

    def test_ok_outcome(self, parser: BarrelParser, tmp_path: Path) -> None:
        barrel = tmp_path / "index.ts"
        barrel.write_text("export { Button } from './button';\n", encoding="utf-8")

        outcome = parser.parse_barrel_file(barrel)

        assert outcome.ok
        assert outcome.names == frozenset({"Button"})
        assert outcome.barrel_path == str(barrel)

    def test_missing_file_outcome(self, parser: BarrelParser, tmp_path: Path) -> None:
        outcome = parser.parse_barrel_file(tmp_path / "missing.ts")

        assert not outcome.ok
        assert outcome.names == frozenset()
        assert isinstance(outcome.error, RegistryLoadError)

    def test_invalid_file_outcome(self, parser: BarrelParser, tmp_path: Path) -> None:
        barrel = tmp_path / "index.ts"
        barrel.write_text("export { {{ from", encoding="utf-8")

        outcome = parser.parse_barrel_file(barrel)

        assert not outcome.ok
        assert "index.ts" in str(outcome.error)


class TestLoadRegistry:
    """Tests for building the registry from several barrels."""

    def test_union_of_barrels_and_extras(self, tmp_path: Path) -> None:
        first = tmp_path / "ui" / "index.ts"
        second = tmp_path / "forms" / "index.ts"
        first.parent.mkdir()
        second.parent.mkdir()
        first.write_text("export { Button } from './button';\n", encoding="utf-8")
        second.write_text("export { Field } from './field';\n", encoding="utf-8")

        registry = load_registry([first, second], extra_names=["Toast"])

        assert registry == frozenset({"Button", "Field", "Toast"})

    def test_missing_and_invalid_barrels_skipped(self, tmp_path: Path) -> None:
        """Unusable barrels never fail the registry build."""
        good = tmp_path / "good.ts"
        bad = tmp_path / "bad.ts"
        good.write_text("export { Button } from './button';\n", encoding="utf-8")
        bad.write_text("export { ;;; from", encoding="utf-8")

        registry = load_registry([tmp_path / "missing.ts", bad, good])

        assert registry == frozenset({"Button"})

    def test_empty_extra_names_ignored(self) -> None:
        assert load_registry([], extra_names=["", "Card"]) == frozenset({"Card"})
