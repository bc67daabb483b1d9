"""Filesystem locations of persisted consolidator state."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ConfigPaths:
    """Locations of the config, cache, history, backups and reports.

    Built once at startup and handed to every component that persists
    state, so tests can point everything at a temporary directory.
    """

    config_dir: Path

    APP_DIR_NAME = "import-consolidator"

    @classmethod
    def from_home(cls) -> "ConfigPaths":
        """Default locations under ``~/.config/import-consolidator``."""
        return cls(Path.home() / ".config" / cls.APP_DIR_NAME)

    @classmethod
    def from_dir(cls, config_dir: Path | str) -> "ConfigPaths":
        return cls(Path(config_dir))

    @property
    def config_file(self) -> Path:
        return self.config_dir / "config.json"

    @property
    def cache_file(self) -> Path:
        return self.config_dir / "cache.json"

    @property
    def history_file(self) -> Path:
        return self.config_dir / "history.json"

    @property
    def backups_dir(self) -> Path:
        return self.config_dir / "backups"

    @property
    def reports_dir(self) -> Path:
        return self.config_dir / "reports"

    @property
    def log_dir(self) -> Path:
        return self.config_dir / "logs"

    def ensure_directories(self) -> None:
        """Create the config, backups and reports directories."""
        for directory in (self.config_dir, self.backups_dir, self.reports_dir):
            directory.mkdir(parents=True, exist_ok=True)
