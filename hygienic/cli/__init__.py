"""CLI support: structured errors and output formatting."""

from .errors import (
    CLIError,
    ConfigurationError,
    ErrorCategory,
    GitDirtyError,
    NoBackupError,
    ProcessingError,
    ValidationError,
    handle_exception,
    to_cli_error,
)
from .output import OutputConfig, OutputManager, should_use_color

__all__ = [
    "CLIError",
    "ConfigurationError",
    "ErrorCategory",
    "GitDirtyError",
    "NoBackupError",
    "ProcessingError",
    "ValidationError",
    "handle_exception",
    "to_cli_error",
    "OutputConfig",
    "OutputManager",
    "should_use_color",
]
