"""Import rewrite engine and per-run orchestration."""

from .consolidator import ImportConsolidator
from .rewrite import merge_names, render_consolidated_import, rewrite
from .types import ConsolidationResult, FileFailure, RewriteOutcome

__all__ = [
    "ImportConsolidator",
    "merge_names",
    "render_consolidated_import",
    "rewrite",
    "ConsolidationResult",
    "FileFailure",
    "RewriteOutcome",
]
