"""Persistent state: file hash cache, run history and backups."""

from .backups import BackupManager, SweepReport
from .file_cache import FileHashCache
from .history import RunHistory, RunRecord

__all__ = [
    "BackupManager",
    "SweepReport",
    "FileHashCache",
    "RunHistory",
    "RunRecord",
]
