"""Structured error types for CLI with recovery suggestions.

This module provides a consistent error handling framework for the CLI,
with categorized error types and actionable recovery suggestions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..exceptions import FileWriteError, ParseError, RegistryLoadError


class ErrorCategory(Enum):
    """Categories of CLI errors for organization and handling."""

    CONFIGURATION = "configuration"  # Invalid config values
    FILE_SYSTEM = "file_system"  # Path issues, permissions
    VALIDATION = "validation"  # Invalid arguments
    PRECONDITION = "precondition"  # Dirty working tree
    PROCESSING = "processing"  # Consolidation failures
    RUNTIME = "runtime"  # Unexpected errors


@dataclass
class CLIError(Exception):
    """Base class for structured CLI errors with recovery suggestions.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        exit_code: Exit code to use when this error causes termination.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 2

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]

        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")

        return "\n".join(lines)

    def __str__(self) -> str:
        """Return the formatted error message."""
        return self.format(use_color=False)


class GitDirtyError(CLIError):
    """Error when the working tree has uncommitted changes."""

    def __init__(self) -> None:
        super().__init__(
            category=ErrorCategory.PRECONDITION,
            message="Git has uncommitted changes",
            suggestion="Commit or stash your changes, or use --force to proceed anyway",
            exit_code=4,
        )


class ConfigurationError(CLIError):
    """Error in configuration file or settings."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        default_suggestion = "Check config.json syntax and value types"
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion or default_suggestion,
            details={"config_file": config_file} if config_file else None,
            exit_code=2,
        )


class ProcessingError(CLIError):
    """Error while consolidating imports."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        suggestion: str | None = None,
    ):
        default_suggestion = "Re-run with --verbose for details"
        super().__init__(
            category=ErrorCategory.PROCESSING,
            message=message,
            suggestion=suggestion or default_suggestion,
            details={"file": file_path} if file_path else None,
            exit_code=2,
        )


class NoBackupError(CLIError):
    """Error when --revert finds nothing to restore."""

    def __init__(self, project_name: str):
        super().__init__(
            category=ErrorCategory.FILE_SYSTEM,
            message=f"No backups found for project: {project_name}",
            suggestion="Backups are only taken when running with --fix",
            details={"project": project_name},
            exit_code=2,
        )


class ValidationError(CLIError):
    """Error for invalid CLI arguments or input."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(
            category=ErrorCategory.VALIDATION,
            message=message,
            suggestion=suggestion or "Check the command syntax with --help",
            exit_code=2,
        )


def to_cli_error(error: Exception) -> CLIError:
    """Map engine and OS exceptions onto the CLI error taxonomy."""
    if isinstance(error, CLIError):
        return error
    if isinstance(error, FileWriteError):
        details = {"file": error.file_path}
        if error.backup_path:
            details["backup"] = error.backup_path
        return CLIError(
            category=ErrorCategory.FILE_SYSTEM,
            message=error.reason,
            suggestion="Restore the file from the backup or run with --revert",
            details=details,
        )
    if isinstance(error, ParseError):
        return ProcessingError(str(error), file_path=error.file_path)
    if isinstance(error, RegistryLoadError):
        return ConfigurationError(
            str(error), suggestion="Check barrel_paths in config.json or --barrel"
        )
    if isinstance(error, OSError):
        return CLIError(
            category=ErrorCategory.FILE_SYSTEM,
            message=str(error),
            suggestion="Check that the path exists and is writable",
        )
    return CLIError(category=ErrorCategory.RUNTIME, message=str(error))


def handle_exception(
    error: Exception,
    use_color: bool = True,
    verbose: bool = False,
) -> tuple[str, int]:
    """Convert any exception to formatted output and exit code.

    Args:
        error: The exception to handle.
        use_color: Whether to use color in output.
        verbose: Whether to include full traceback.

    Returns:
        Tuple of (formatted_message, exit_code).
    """
    import traceback

    cli_error = to_cli_error(error)
    message = cli_error.format(use_color=use_color)

    if verbose:
        message += "\n\nTraceback:\n" + traceback.format_exc()

    return message, cli_error.exit_code
