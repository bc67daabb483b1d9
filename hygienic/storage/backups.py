"""Pre-write snapshots of rewritten files.

Layout::

    backups/<project>/<run timestamp>/files/<flattened relative path>
    backups/<project>/<run timestamp>/manifest.json

The manifest maps each flattened name back to the original absolute path
so a batch can be restored.
"""

import json
import os
import shutil
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path

from ..consolidator_logging import get_logger
from .atomic import atomic_write_text

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S-%f"
RETENTION_DAYS = 7
MANIFEST_FILE = "manifest.json"


def format_run_timestamp(moment: datetime | None = None) -> str:
    return (moment or datetime.now(UTC)).strftime(TIMESTAMP_FORMAT)


def parse_run_timestamp(name: str) -> datetime:
    """Parse a batch directory name.

    Raises:
        ValueError: If the name is not a run timestamp.
    """
    return datetime.strptime(name, TIMESTAMP_FORMAT).replace(tzinfo=UTC)


def flatten_relative_path(file_path: Path, project_root: Path) -> str:
    """``src/pages/Home.tsx`` -> ``src_pages_Home.tsx``."""
    relative = os.path.relpath(Path(file_path).resolve(), project_root)
    return relative.replace(os.sep, "_").replace("/", "_")


@dataclass
class SweepReport:
    """Outcome of a retention sweep.

    Failures are per entry; a bad entry never stops the sweep.
    """

    removed: list[Path] = field(default_factory=list)
    failures: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class BackupManager:
    """Create, expire and restore per-run backup batches."""

    def __init__(
        self,
        backups_dir: Path | str,
        project_root: Path | str | None = None,
        project_name: str | None = None,
        run_timestamp: str | None = None,
    ):
        self.logger = get_logger()
        self.backups_dir = Path(backups_dir)
        self.project_root = Path(project_root or Path.cwd()).resolve()
        self.project_name = project_name or self.project_root.name
        self.run_timestamp = run_timestamp or format_run_timestamp()

    def start_run(self) -> str:
        """Begin a new batch; later backups go under a fresh run timestamp."""
        self.run_timestamp = format_run_timestamp()
        return self.run_timestamp

    @property
    def project_dir(self) -> Path:
        return self.backups_dir / self.project_name

    @property
    def batch_dir(self) -> Path:
        return self.project_dir / self.run_timestamp

    def create_backup(self, file_path: Path | str) -> Path:
        """Copy the current bytes of ``file_path`` into this run's batch.

        Raises:
            OSError: If the snapshot cannot be written.
        """
        source = Path(file_path).resolve()
        files_dir = self.batch_dir / "files"
        files_dir.mkdir(parents=True, exist_ok=True)

        manifest = self._read_manifest(self.batch_dir)
        entries: dict[str, str] = manifest.setdefault("files", {})

        name = flatten_relative_path(source, self.project_root)
        candidate, counter = name, 1
        while candidate in entries and entries[candidate] != str(source):
            candidate = f"{name}.{counter}"
            counter += 1

        backup_file = files_dir / candidate
        shutil.copy2(source, backup_file)

        entries[candidate] = str(source)
        manifest.setdefault("created_at", datetime.now(UTC).isoformat())
        manifest["project_root"] = str(self.project_root)
        atomic_write_text(self.batch_dir / MANIFEST_FILE, json.dumps(manifest, indent=2))

        self.logger.debug(f"Backed up {source} to {backup_file}")
        return backup_file

    def cleanup_old_backups(
        self, now: datetime | None = None, retention_days: int = RETENTION_DAYS
    ) -> SweepReport:
        """Remove batches of every project older than the retention window."""
        report = SweepReport()
        cutoff = (now or datetime.now(UTC)) - timedelta(days=retention_days)

        try:
            project_dirs = sorted(p for p in self.backups_dir.iterdir() if p.is_dir())
        except OSError as e:
            report.failures.append((self.backups_dir, str(e)))
            return report

        for project_dir in project_dirs:
            try:
                batch_dirs = sorted(project_dir.iterdir())
            except OSError as e:
                report.failures.append((project_dir, str(e)))
                continue

            for batch_dir in batch_dirs:
                try:
                    if parse_run_timestamp(batch_dir.name) < cutoff:
                        shutil.rmtree(batch_dir)
                        report.removed.append(batch_dir)
                        self.logger.debug(f"Cleaned up old backup: {batch_dir}")
                except (ValueError, OSError) as e:
                    report.failures.append((batch_dir, str(e)))

        return report

    def list_batches(self) -> list[Path]:
        """Batches of this project, oldest first."""
        if not self.project_dir.is_dir():
            return []
        batches = []
        for batch_dir in self.project_dir.iterdir():
            try:
                batches.append((parse_run_timestamp(batch_dir.name), batch_dir))
            except ValueError:
                continue
        return [path for _, path in sorted(batches)]

    def latest_batch(self) -> Path | None:
        batches = self.list_batches()
        return batches[-1] if batches else None

    def restore_batch(self, batch_dir: Path) -> list[Path]:
        """Copy every snapshot of ``batch_dir`` back over its original file.

        Raises:
            FileNotFoundError: If the batch has no manifest.
        """
        manifest_path = batch_dir / MANIFEST_FILE
        if not manifest_path.exists():
            raise FileNotFoundError(f"No backup manifest in {batch_dir}")

        restored: list[Path] = []
        for name, original in self._read_manifest(batch_dir).get("files", {}).items():
            snapshot = batch_dir / "files" / name
            target = Path(original)
            content = snapshot.read_bytes()
            atomic_write_text(target, content.decode("utf-8"), preserve_mode=True)
            restored.append(target)
            self.logger.info(f"Restored {target} from {snapshot}")
        return restored

    def restore_latest(self) -> list[Path]:
        """Restore the most recent batch; returns [] when there is none."""
        batch_dir = self.latest_batch()
        if batch_dir is None:
            return []
        return self.restore_batch(batch_dir)

    def _read_manifest(self, batch_dir: Path) -> dict:
        try:
            with open(batch_dir / MANIFEST_FILE, encoding="utf-8") as f:
                data = json.load(f)
            return data if isinstance(data, dict) else {}
        except FileNotFoundError:
            return {}
        except ValueError as e:
            self.logger.warning(f"Ignoring malformed backup manifest in {batch_dir}: {e}")
            return {}
