"""Type definitions for the consolidation pipeline."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class RewriteOutcome:
    """New file text computed from the scan of one file.

    Attributes:
        new_content: Rewritten text (identical to the input when unchanged)
        changed: Whether new_content differs from the original
        consolidated_import: The merged import statement, or "" without matches
        original_imports: One rendered statement per original match
    """

    new_content: str
    changed: bool = False
    consolidated_import: str = ""
    original_imports: list[str] = field(default_factory=list)


@dataclass
class ConsolidationResult:
    """Per-file result returned to callers and written to reports.

    Attributes:
        file_path: Path of the processed file as discovered
        original_imports: Rendered form of each qualifying import
        consolidated_import: The merged import statement, or ""
        changed: Whether consolidation changes the file content
        backup_path: Snapshot of the original bytes, set only when written
        other_imports: Always empty; kept for report format compatibility
    """

    file_path: str
    original_imports: list[str] = field(default_factory=list)
    consolidated_import: str = ""
    changed: bool = False
    backup_path: str | None = None
    other_imports: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON reports."""
        data: dict[str, Any] = {
            "filePath": self.file_path,
            "originalImports": self.original_imports,
            "consolidatedImport": self.consolidated_import,
            "otherImports": self.other_imports,
            "changed": self.changed,
        }
        if self.backup_path:
            data["backupPath"] = self.backup_path
        return data


@dataclass
class FileFailure:
    """A file that could not be processed during a run."""

    file_path: str
    error: str
