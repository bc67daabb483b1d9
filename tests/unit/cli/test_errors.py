"""Unit tests for structured CLI errors."""

from hygienic.cli.errors import (
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
from hygienic.exceptions import FileWriteError, ParseError, RegistryLoadError


class TestCLIError:
    """Tests for the base error type."""

    def test_format_without_color(self) -> None:
        error = CLIError(
            category=ErrorCategory.RUNTIME,
            message="Something failed",
            suggestion="Try again",
            details={"file": "App.tsx"},
        )

        formatted = error.format(use_color=False)

        assert formatted.splitlines() == [
            "Error: Something failed",
            "Suggestion: Try again",
            "  file: App.tsx",
        ]

    def test_format_with_color(self) -> None:
        error = CLIError(category=ErrorCategory.RUNTIME, message="Broken")
        assert "\033[91m" in error.format(use_color=True)

    def test_str_is_plain(self) -> None:
        error = CLIError(category=ErrorCategory.RUNTIME, message="Broken")
        assert str(error) == "Error: Broken"


class TestErrorSubclasses:
    """Tests for exit codes and categories of the concrete errors."""

    def test_git_dirty(self) -> None:
        error = GitDirtyError()
        assert error.exit_code == 4
        assert error.category == ErrorCategory.PRECONDITION
        assert "--force" in error.suggestion

    def test_configuration(self) -> None:
        error = ConfigurationError("Bad value", config_file="/tmp/config.json")
        assert error.exit_code == 2
        assert error.details == {"config_file": "/tmp/config.json"}

    def test_processing(self) -> None:
        error = ProcessingError("2 file(s) could not be processed", file_path="a.tsx")
        assert error.exit_code == 2
        assert error.category == ErrorCategory.PROCESSING

    def test_no_backup(self) -> None:
        error = NoBackupError("webapp")
        assert "webapp" in error.message
        assert error.category == ErrorCategory.FILE_SYSTEM

    def test_validation_default_suggestion(self) -> None:
        assert "--help" in ValidationError("Bad flag").suggestion


class TestHandleException:
    """Tests for converting exceptions to output and exit codes."""

    def test_cli_error(self) -> None:
        message, code = handle_exception(GitDirtyError(), use_color=False)
        assert code == 4
        assert message.startswith("Error: Git has uncommitted changes")

    def test_generic_exception(self) -> None:
        message, code = handle_exception(RuntimeError("kaput"), use_color=False)
        assert code == 2
        assert message == "Error: kaput"

    def test_verbose_adds_traceback(self) -> None:
        try:
            raise RuntimeError("kaput")
        except RuntimeError as e:
            message, _ = handle_exception(e, use_color=False, verbose=True)
        assert "Traceback" in message


class TestToCLIError:
    """Tests for mapping engine exceptions onto CLI errors."""

    def test_write_error_keeps_backup_detail(self) -> None:
        error = to_cli_error(
            FileWriteError("src/App.tsx", "disk full", "/backups/src_App.tsx")
        )
        assert error.category == ErrorCategory.FILE_SYSTEM
        assert error.details == {"file": "src/App.tsx", "backup": "/backups/src_App.tsx"}

    def test_parse_error(self) -> None:
        error = to_cli_error(ParseError("src/App.tsx"))
        assert isinstance(error, ProcessingError)
        assert error.details == {"file": "src/App.tsx"}

    def test_registry_error(self) -> None:
        error = to_cli_error(RegistryLoadError("ui/index.ts", "syntax error"))
        assert isinstance(error, ConfigurationError)

    def test_os_error(self) -> None:
        error = to_cli_error(PermissionError("denied"))
        assert error.category == ErrorCategory.FILE_SYSTEM

    def test_cli_error_passthrough(self) -> None:
        original = GitDirtyError()
        assert to_cli_error(original) is original
