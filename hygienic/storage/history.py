"""Append-only ledger of consolidation runs."""

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..consolidator_logging import get_logger
from .atomic import atomic_write_text


@dataclass
class RunRecord:
    """One entry of the run history ledger."""

    paths: list[str]
    options: dict[str, Any] = field(default_factory=dict)
    status: str = "success"
    files_changed: int = 0
    files_processed: int = 0
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "paths": self.paths,
            "options": self.options,
            "status": self.status,
            "filesChanged": self.files_changed,
            "filesProcessed": self.files_processed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RunRecord":
        """Create from dictionary."""
        return cls(
            timestamp=str(data.get("timestamp", "")),
            paths=list(data.get("paths", [])),
            options=dict(data.get("options", {})),
            status=str(data.get("status", "success")),
            files_changed=int(data.get("filesChanged", 0)),
            files_processed=int(data.get("filesProcessed", 0)),
        )


class RunHistory:
    """Ordered run records persisted as a JSON list.

    Every mutation is written to disk immediately. A corrupted or missing
    history file loads as an empty ledger.
    """

    def __init__(self, history_file: Path | str):
        self.logger = get_logger()
        self.history_file = Path(history_file)
        self._records: list[RunRecord] = []

    def load(self) -> None:
        try:
            with open(self.history_file, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, list):
                raise ValueError("history root must be a list")
            self._records = [RunRecord.from_dict(item) for item in data]
        except FileNotFoundError:
            self._records = []
        except (OSError, ValueError, TypeError, AttributeError) as e:
            self.logger.warning(f"Ignoring corrupted run history: {e}")
            self._records = []

    def save(self) -> None:
        atomic_write_text(
            self.history_file,
            json.dumps([record.to_dict() for record in self._records], indent=2),
        )

    def add_run(self, record: RunRecord) -> None:
        self._records.append(record)
        self.save()

    def clear(self) -> None:
        self._records = []
        self.save()

    def get_data(self) -> list[RunRecord]:
        return list(self._records)

    def recent(self, limit: int = 10) -> list[RunRecord]:
        """Most recent records first."""
        if limit <= 0:
            return []
        return list(reversed(self._records[-limit:]))

    def __len__(self) -> int:
        return len(self._records)
