"""File content hash cache for incremental consolidation runs.

Files whose bytes have not changed since they were last processed are
skipped on the next run.
"""

import hashlib
import json
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..consolidator_logging import get_logger
from .atomic import atomic_write_text

if TYPE_CHECKING:
    from ..consolidation.types import ConsolidationResult


class FileHashCache:
    """Track file content hashes to skip unchanged files.

    Stores MD5 digests of file contents keyed by resolved file path, in a
    single JSON map::

        {"/abs/path/Component.tsx": {"hash": str, "changed": bool, "timestamp": str}}

    A disabled cache never reports hits and never touches disk.
    """

    def __init__(self, cache_path: Path | str, enabled: bool = True):
        """Initialize file hash cache.

        Args:
            cache_path: Location of the persisted JSON map
            enabled: Whether caching is enabled in configuration
        """
        self.logger = get_logger()
        self.cache_path = Path(cache_path)
        self.enabled = enabled

        # In-memory cache: {path: {"hash": str, "changed": bool, "timestamp": str}}
        self._cache: dict[str, dict[str, Any]] = {}

    def load(self) -> None:
        """Load existing cache from disk; missing or malformed data resets it."""
        try:
            with open(self.cache_path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("cache root must be an object")
            self._cache = {
                path: entry for path, entry in data.items() if isinstance(entry, dict)
            }
            self.logger.debug(f"Loaded file hash cache with {len(self._cache)} entries")
        except FileNotFoundError:
            self._cache = {}
            self.logger.debug("Initialized new file hash cache")
        except (OSError, ValueError) as e:
            self.logger.warning(f"Ignoring corrupted file hash cache: {e}")
            self._cache = {}

    def save(self) -> None:
        """Persist cache to disk; no-op when caching is disabled."""
        if not self.enabled:
            return
        atomic_write_text(self.cache_path, json.dumps(self._cache, indent=2))

    @staticmethod
    def compute_file_hash(file_path: Path | str) -> str:
        """Compute MD5 hex digest of file contents.

        Returns:
            Hex digest, or "" if the file cannot be read
        """
        md5 = hashlib.md5(usedforsecurity=False)
        try:
            with open(file_path, "rb") as f:
                # Read in chunks for large files
                for chunk in iter(lambda: f.read(65536), b""):
                    md5.update(chunk)
            return md5.hexdigest()
        except OSError:
            return ""

    @staticmethod
    def cache_key(file_path: Path | str) -> str:
        return str(Path(file_path).resolve())

    def is_file_cached(self, file_path: Path | str) -> bool:
        """Check whether the file is unchanged since it was last cached.

        An unreadable file hashes to "" and is never a hit.
        """
        if not self.enabled:
            return False

        current_hash = self.compute_file_hash(file_path)
        cached = self._cache.get(self.cache_key(file_path))
        return bool(current_hash) and cached is not None and cached.get("hash") == current_hash

    def cache_file(self, file_path: Path | str, result: "ConsolidationResult") -> None:
        """Record the current hash of a processed file, replacing any prior entry."""
        if not self.enabled:
            return
        self._cache[self.cache_key(file_path)] = {
            "hash": self.compute_file_hash(file_path),
            "changed": result.changed,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    def get_entry(self, file_path: Path | str) -> dict[str, Any] | None:
        return self._cache.get(self.cache_key(file_path))

    def clear(self) -> None:
        """Clear all cached hashes (forces full reprocessing)."""
        self._cache = {}
        self.save()
        self.logger.info("Cleared file hash cache")

    def __len__(self) -> int:
        """Return number of cached file entries."""
        return len(self._cache)
