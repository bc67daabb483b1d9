"""
Shared fixtures for the hygienic test suite.

Provides test fixtures for:
- Isolated config/cache/history/backup directories
- Barrel module and TSX source builders
- A sample project laid out like a typical React app
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from hygienic.config import ConfigPaths, ConsolidatorConfig
from hygienic.consolidation import ImportConsolidator

BARREL_ROOT = "@/shared/components/ui"


# ---------------------------------------------------------------------------
# Source builders
# ---------------------------------------------------------------------------


def barrel_content(exports: list[str]) -> str:
    """Barrel module re-exporting each name from a kebab-case sibling."""
    return "".join(
        f"export {{ {name} }} from './{name.lower()}';\n" for name in exports
    )


def mock_tsx(imports: list[tuple[str, str]], body: str = "") -> str:
    """TSX file importing ``(names, component)`` pairs from barrel sub-paths."""
    lines = ["import React from 'react';"]
    for names, component in imports:
        lines.append(f"import {{ {names} }} from '{BARREL_ROOT}/{component}';")
    lines.append("")
    lines.append(
        body
        or "export function Page() {\n  return <div className=\"page\" />;\n}"
    )
    return "\n".join(lines) + "\n"


@pytest.fixture()
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write ``content`` to ``relative`` under tmp_path, creating parents."""

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write


# ---------------------------------------------------------------------------
# Configuration fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def config_paths(tmp_path: Path) -> ConfigPaths:
    """State directory isolated from the user's home."""
    paths = ConfigPaths.from_dir(tmp_path / "state")
    paths.ensure_directories()
    return paths


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    """Sample project with a barrel and a few components."""
    root = tmp_path / "project"
    barrel = root / "src" / "shared" / "components" / "ui" / "index.ts"
    barrel.parent.mkdir(parents=True)
    barrel.write_text(
        barrel_content(["Button", "Input", "Card", "Dialog", "Label"]),
        encoding="utf-8",
    )

    pages = root / "src" / "pages"
    pages.mkdir(parents=True)
    (pages / "Login.tsx").write_text(
        mock_tsx([("Button", "button"), ("Input", "input"), ("Label", "label")]),
        encoding="utf-8",
    )
    (pages / "Plain.tsx").write_text(
        "import React from 'react';\n\nexport const Plain = () => <p>plain</p>;\n",
        encoding="utf-8",
    )
    return root


@pytest.fixture()
def config() -> ConsolidatorConfig:
    return ConsolidatorConfig()


@pytest.fixture()
def consolidator(
    config: ConsolidatorConfig, config_paths: ConfigPaths, project: Path
) -> ImportConsolidator:
    """Initialized consolidator rooted at the sample project."""
    instance = ImportConsolidator(config, config_paths, project_root=project)
    instance.initialize()
    return instance


@pytest.fixture()
def barrel_source() -> Callable[[list[str]], str]:
    return barrel_content


@pytest.fixture()
def tsx_source() -> Callable[..., str]:
    return mock_tsx
