"""Per-run orchestration of UI import consolidation.

Files are discovered as one batch and processed strictly one at a time:
cache lookup, scan, rewrite, backup, atomic write, cache update. A failure
in one file is logged and recorded; it never stops the batch.
"""

import fnmatch
from collections.abc import Iterable, Sequence
from pathlib import Path

from ..analysis.import_scanner import ImportScanner
from ..analysis.registry_parser import BarrelParser, load_registry
from ..config.models import ConsolidatorConfig
from ..config.paths import ConfigPaths
from ..consolidator_logging import get_logger
from ..exceptions import FileWriteError, ParseError
from ..git.status import GitStatusChecker
from ..storage.atomic import atomic_write_text
from ..storage.backups import BackupManager, SweepReport
from ..storage.file_cache import FileHashCache
from ..storage.history import RunHistory, RunRecord
from .rewrite import rewrite
from .types import ConsolidationResult, FileFailure


class ImportConsolidator:
    """Consolidate barrel sub-path imports across a set of files.

    Example:
        >>> consolidator = ImportConsolidator(config, ConfigPaths.from_home())
        >>> consolidator.initialize()
        >>> results = consolidator.process_files(["src"], dry_run=True)
    """

    def __init__(
        self,
        config: ConsolidatorConfig,
        paths: ConfigPaths,
        project_root: Path | str | None = None,
    ):
        self.logger = get_logger()
        self.config = config
        self.paths = paths
        self.project_root = Path(project_root or Path.cwd()).resolve()

        self.cache = FileHashCache(paths.cache_file, enabled=config.cache_enabled)
        self.history = RunHistory(paths.history_file)
        self.backups = BackupManager(paths.backups_dir, project_root=self.project_root)
        self.git = GitStatusChecker(self.project_root)

        self.barrel_parser = BarrelParser()
        self.scanner = ImportScanner()
        self.registry: frozenset[str] = frozenset()

        # Files that failed during the last process_files call
        self.failures: list[FileFailure] = []

    def initialize(self) -> None:
        """Load cache and history, then build the component registry."""
        self.cache.load()
        self.history.load()
        self.initialize_registry(self.config.barrel_paths, self.config.ui_components)

    def initialize_registry(
        self, barrel_paths: Iterable[Path | str], extra_component_names: Iterable[str]
    ) -> frozenset[str]:
        """Build the registry; relative barrel paths resolve against the project root."""
        resolved = [self._resolve(p) for p in barrel_paths]
        self.registry = load_registry(
            resolved, extra_component_names, parser=self.barrel_parser
        )
        self.logger.debug(f"Component registry holds {len(self.registry)} names")
        return self.registry

    def check_preconditions(self, force: bool = False) -> bool:
        return self.git.check_preconditions(force)

    def cleanup_old_backups(self) -> SweepReport:
        """Expire old backup batches; sweep failures are logged and dropped."""
        report = self.backups.cleanup_old_backups()
        for path, reason in report.failures:
            self.logger.debug(f"Skipped backup entry {path}: {reason}")
        return report

    def revert_latest(self) -> list[Path]:
        """Restore files from this project's most recent backup batch."""
        return self.backups.restore_latest()

    def record_run(self, record: RunRecord) -> None:
        self.history.add_run(record)

    def discover_files(
        self,
        paths: Sequence[Path | str],
        include_patterns: Sequence[str] | None = None,
        exclude_patterns: Sequence[str] | None = None,
    ) -> list[Path]:
        """Expand directories into source files, in deterministic order.

        Explicit file paths are taken as-is; filters apply only to files
        found by directory expansion. Missing paths are skipped.
        """
        discovered: list[Path] = []
        seen: set[Path] = set()

        for raw_path in paths:
            path = Path(raw_path)
            if path.is_file():
                candidates = [path]
            elif path.is_dir():
                candidates = self._find_source_files(
                    path, include_patterns, exclude_patterns
                )
            else:
                self.logger.debug(f"Path not found: {raw_path}")
                continue

            for candidate in candidates:
                key = candidate.resolve()
                if key not in seen:
                    seen.add(key)
                    discovered.append(candidate)

        return discovered

    def process_files(
        self,
        paths: Sequence[Path | str],
        dry_run: bool = True,
        sort_imports: bool = False,
        include_patterns: Sequence[str] | None = None,
        exclude_patterns: Sequence[str] | None = None,
        use_cache: bool = True,
    ) -> list[ConsolidationResult]:
        """Consolidate imports in every discovered file.

        Returns:
            One result per successfully processed file, in discovery order.
            Cached and failed files are omitted; failures are kept in
            ``self.failures``.
        """
        results: list[ConsolidationResult] = []
        self.failures = []
        if not dry_run:
            self.backups.start_run()

        files = self.discover_files(paths, include_patterns, exclude_patterns)
        self.logger.info(f"Found {len(files)} files to process")

        for file_path in files:
            self.logger.debug(f"Processing: {file_path}")

            if use_cache and self.cache.is_file_cached(file_path):
                self.logger.info(f"[SKIP] {file_path} (cached, unchanged)")
                continue

            try:
                result = self.consolidate_file(file_path, dry_run, sort_imports)
            except (ParseError, FileWriteError, OSError, UnicodeDecodeError) as e:
                self.logger.error(f"[ERROR] Failed to process {file_path}: {e}")
                self.failures.append(FileFailure(file_path=str(file_path), error=str(e)))
                continue

            self._log_result(result, dry_run)
            results.append(result)
            self.cache.cache_file(file_path, result)

        try:
            self.cache.save()
        except OSError as e:
            self.logger.warning(f"Failed to save file hash cache: {e}")

        return results

    def consolidate_file(
        self, file_path: Path | str, dry_run: bool = True, sort_imports: bool = False
    ) -> ConsolidationResult:
        """Scan and rewrite one file; writes only when not a dry run.

        Raises:
            ParseError: If the file is not valid TypeScript/TSX.
            OSError: If the file cannot be read or backed up.
            FileWriteError: If the rewrite cannot be written; the backup stays.
        """
        path = Path(file_path)
        barrel_root = self.config.barrel_root
        matches, content = self.scanner.scan_file(path, self.registry, barrel_root)
        outcome = rewrite(matches, content, sort_imports, barrel_root)

        backup_path: Path | None = None
        if outcome.changed and not dry_run:
            backup_path = self.backups.create_backup(path)
            try:
                atomic_write_text(path, outcome.new_content, preserve_mode=True)
            except OSError as e:
                raise FileWriteError(path, str(e), backup_path) from e

        return ConsolidationResult(
            file_path=str(file_path),
            original_imports=outcome.original_imports,
            consolidated_import=outcome.consolidated_import,
            changed=outcome.changed,
            backup_path=str(backup_path) if backup_path else None,
        )

    def _find_source_files(
        self,
        root: Path,
        include_patterns: Sequence[str] | None,
        exclude_patterns: Sequence[str] | None,
    ) -> list[Path]:
        files: set[Path] = set()
        for extension in self.config.extensions:
            files.update(p for p in root.rglob(f"*{extension}") if p.is_file())

        excludes = (
            list(exclude_patterns)
            if exclude_patterns is not None
            else self.config.default_excludes
        )

        filtered = []
        for file_path in sorted(files):
            relative = file_path.relative_to(root).as_posix()
            if any(self._matches(relative, pattern) for pattern in excludes):
                continue
            if include_patterns and not any(
                self._matches(relative, pattern) for pattern in include_patterns
            ):
                continue
            filtered.append(file_path)
        return filtered

    @staticmethod
    def _matches(relative_path: str, pattern: str) -> bool:
        """Substring match, or glob match on the path or its file name."""
        return (
            pattern in relative_path
            or fnmatch.fnmatch(relative_path, pattern)
            or fnmatch.fnmatch(relative_path.rsplit("/", 1)[-1], pattern)
        )

    def _resolve(self, path: Path | str) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.project_root / path

    def _log_result(self, result: ConsolidationResult, dry_run: bool) -> None:
        if result.changed:
            if dry_run:
                self.logger.info(f"[CHANGE] Would consolidate imports in {result.file_path}")
            else:
                self.logger.info(
                    f"[CHANGE] Consolidated imports in {result.file_path} -> backup created"
                )
                if result.backup_path:
                    self.logger.info(f"[BACKUP] Saved to {result.backup_path}")
        else:
            self.logger.info(f"[SKIP] No UI imports found in {result.file_path}")

        if result.original_imports:
            self.logger.debug("Original imports:")
            for statement in result.original_imports:
                self.logger.debug(f"  - {statement}")
            self.logger.debug(f"Consolidated to: {result.consolidated_import}")
