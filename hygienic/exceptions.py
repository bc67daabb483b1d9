"""Exception types raised by the consolidation engine."""

from pathlib import Path


class ConsolidatorError(Exception):
    """Base class for engine errors."""


class RegistryLoadError(ConsolidatorError):
    """A barrel file could not be read or parsed.

    Never fatal: the registry is built without that barrel's names.
    """

    def __init__(self, barrel_path: Path | str, reason: str):
        self.barrel_path = str(barrel_path)
        self.reason = reason
        super().__init__(f"Could not parse barrel file {barrel_path}: {reason}")


class ParseError(ConsolidatorError):
    """A source file is not syntactically valid TypeScript/TSX."""

    def __init__(self, file_path: Path | str | None, reason: str = "syntax errors"):
        self.file_path = str(file_path) if file_path is not None else None
        self.reason = reason
        target = self.file_path or "<source>"
        super().__init__(f"Could not parse {target} as valid TypeScript: {reason}")


class FileWriteError(ConsolidatorError):
    """Rewritten content could not be written back to disk.

    The backup taken before the write is kept for manual recovery.
    """

    def __init__(
        self, file_path: Path | str, reason: str, backup_path: Path | str | None
    ):
        self.file_path = str(file_path)
        self.reason = reason
        self.backup_path = str(backup_path) if backup_path else None
        message = f"Failed to write {file_path}: {reason}"
        if self.backup_path:
            message = f"{message} (original kept at {self.backup_path})"
        super().__init__(message)
