"""Click-based CLI interface for the hygienic import consolidator."""

import json
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError as PydanticValidationError

from . import __version__
from .cli.errors import (
    ConfigurationError,
    GitDirtyError,
    NoBackupError,
    ProcessingError,
    ValidationError,
    handle_exception,
)
from .cli.output import OutputConfig, OutputManager
from .config import ConfigLoader, ConfigPaths
from .consolidation import ConsolidationResult, ImportConsolidator
from .consolidator_logging import get_default_log_file, setup_logging
from .storage import FileHashCache, RunHistory, RunRecord


def _config_paths(config_dir: str | None) -> ConfigPaths:
    if config_dir:
        return ConfigPaths.from_dir(config_dir)
    return ConfigPaths.from_home()


def _show_history(history: RunHistory, output: OutputManager) -> None:
    records = history.recent(10)
    if not records:
        output.warning("No history found.", force=True)
        return

    output.header("Run History")
    for i, run in enumerate(records, 1):
        output.plain(
            f"{i:>2}. [{run.timestamp}] {run.status} - "
            f"{run.files_changed}/{run.files_processed} files",
            force=True,
        )
        more = "..." if len(run.paths) > 3 else ""
        output.plain(f"    Paths: {', '.join(run.paths[:3])}{more}", force=True)
        active = ", ".join(f"--{key}" for key, value in run.options.items() if value)
        output.plain(f"    Options: {active}", force=True)


def _write_report(
    reports_dir: Path, results: list[ConsolidationResult], files_changed: int
) -> Path:
    now = datetime.now(UTC)
    reports_dir.mkdir(parents=True, exist_ok=True)
    report_file = reports_dir / f"{now.strftime('%Y-%m-%dT%H-%M-%S-%f')}.json"
    report = {
        "timestamp": now.isoformat(),
        "summary": {
            "filesProcessed": len(results),
            "filesChanged": files_changed,
        },
        "results": [result.to_dict() for result in results],
    }
    with open(report_file, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)
    return report_file


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="hygienic")
@click.argument("paths", nargs=-1, type=click.Path())
@click.option("--fix", is_flag=True, help="Apply changes (default is dry-run)")
@click.option("--dry-run", is_flag=True, help="Show changes without applying")
@click.option("--sort", "sort_names", is_flag=True, help="Sort imported names alphabetically")
@click.option("--force", "-f", is_flag=True, help="Run even with uncommitted git changes")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output")
@click.option("--check", is_flag=True, help="Exit with status 1 if any file would change")
@click.option(
    "--except",
    "exclude_patterns",
    multiple=True,
    metavar="PATTERN",
    help="Exclude files matching PATTERN (repeatable)",
)
@click.option(
    "--include",
    "include_patterns",
    multiple=True,
    metavar="PATTERN",
    help="Only process files matching PATTERN (repeatable)",
)
@click.option(
    "--barrel",
    "barrels",
    multiple=True,
    type=click.Path(),
    help="Add a barrel file to the saved configuration (repeatable)",
)
@click.option("--no-cache", is_flag=True, help="Process files even if unchanged since last run")
@click.option("--report", is_flag=True, help="Write a JSON report of the run")
@click.option("--revert", is_flag=True, help="Restore files from the latest backup")
@click.option("--history", "show_history", is_flag=True, help="Show run history")
@click.option("--clear-history", is_flag=True, help="Clear stored run history")
@click.option("--clear-cache", is_flag=True, help="Forget cached file hashes")
@click.option("--disable-history", is_flag=True, help="Do not record this run")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False),
    envvar="HYGIENIC_CONFIG_DIR",
    help="Directory for config, cache, history and backups",
)
def cli(
    paths: tuple[str, ...],
    fix: bool,
    dry_run: bool,
    sort_names: bool,
    force: bool,
    verbose: bool,
    quiet: bool,
    check: bool,
    exclude_patterns: tuple[str, ...],
    include_patterns: tuple[str, ...],
    barrels: tuple[str, ...],
    no_cache: bool,
    report: bool,
    revert: bool,
    show_history: bool,
    clear_history: bool,
    clear_cache: bool,
    disable_history: bool,
    no_color: bool,
    config_dir: str | None,
) -> None:
    """Consolidate UI component imports into a single barrel import.

    PATHS are files or directories to process (default: src). Runs are
    dry runs unless --fix is given.
    """
    output = OutputManager(OutputConfig.from_flags(verbose, quiet, no_color))
    config_paths = _config_paths(config_dir)

    try:
        if quiet and verbose:
            raise ValidationError("--quiet and --verbose cannot be combined")
        config_paths.ensure_directories()
        setup_logging(
            quiet=quiet,
            verbose=verbose,
            log_file=get_default_log_file(config_paths.log_dir),
        )
        exit_code = _run(
            output,
            config_paths,
            paths=list(paths) or ["src"],
            options={
                "fix": fix,
                "dryRun": dry_run,
                "sort": sort_names,
                "force": force,
                "check": check,
                "noCache": no_cache,
                "report": report,
            },
            exclude_patterns=list(exclude_patterns) or None,
            include_patterns=list(include_patterns) or None,
            barrels=list(barrels),
            revert=revert,
            show_history=show_history,
            clear_history=clear_history,
            clear_cache=clear_cache,
            disable_history=disable_history,
        )
    except Exception as e:
        message, exit_code = handle_exception(
            e, use_color=output.config.use_color, verbose=verbose
        )
        output.raw_error(message)

    sys.exit(exit_code)


def _run(
    output: OutputManager,
    config_paths: ConfigPaths,
    paths: list[str],
    options: dict[str, Any],
    exclude_patterns: list[str] | None,
    include_patterns: list[str] | None,
    barrels: list[str],
    revert: bool,
    show_history: bool,
    clear_history: bool,
    clear_cache: bool,
    disable_history: bool,
) -> int:
    loader = ConfigLoader(config_paths)
    config = loader.load()

    if show_history:
        history = RunHistory(config_paths.history_file)
        history.load()
        _show_history(history, output)
        return 0

    if clear_history:
        RunHistory(config_paths.history_file).clear()
        output.success("History cleared.")
        return 0

    if clear_cache:
        FileHashCache(config_paths.cache_file).clear()
        output.success("Cache cleared.")
        return 0

    if barrels:
        merged = list(dict.fromkeys([*config.barrel_paths, *barrels]))
        try:
            config = loader.set("barrel_paths", merged)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid barrel path: {e}", config_file=str(config_paths.config_file)
            ) from e

    consolidator = ImportConsolidator(config, config_paths)

    if revert:
        restored = consolidator.revert_latest()
        if not restored:
            raise NoBackupError(consolidator.backups.project_name)
        for path in restored:
            output.info(f"Restored {path}")
        output.success(f"Restored {len(restored)} file(s)", force=True)
        return 0

    consolidator.initialize()

    if not consolidator.check_preconditions(options["force"]):
        raise GitDirtyError()

    consolidator.cleanup_old_backups()

    dry_run = options["dryRun"] or not options["fix"]
    results = consolidator.process_files(
        paths,
        dry_run=dry_run,
        sort_imports=options["sort"] or config.sort_imports,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
        use_cache=not options["noCache"],
    )

    files_changed = sum(1 for result in results if result.changed)
    failed = len(consolidator.failures)

    if not disable_history:
        consolidator.record_run(
            RunRecord(
                paths=paths,
                options=options,
                status="success" if not failed else "partial",
                files_changed=files_changed,
                files_processed=len(results),
            )
        )

    output.plain("")
    output.header("Summary")
    output.summary(len(results), files_changed, failed)

    if options["report"]:
        report_file = _write_report(config_paths.reports_dir, results, files_changed)
        output.info(f"Report saved to: {report_file}")

    if options["check"] and files_changed > 0:
        return 1

    if failed:
        raise ProcessingError(
            f"{failed} file(s) could not be processed",
            file_path=consolidator.failures[0].file_path,
        )

    return 0

