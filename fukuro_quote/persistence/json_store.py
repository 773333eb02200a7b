"""
JSON file store — raw read/write of a JSON array file.
No locking: concurrent writers are last-writer-wins.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """A data file could not be written."""


class JsonFileStore:
    """A list of JSON records kept in one file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.write([])

    def read(self) -> list[dict[str, Any]]:
        """Return all records; an unreadable file reads as empty."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error(f"[STORE] Error reading {self.path}: {exc}")
            return []
        if not isinstance(data, list):
            logger.error(f"[STORE] {self.path} does not hold a JSON array")
            return []
        return data

    def write(self, records: list[dict[str, Any]]) -> None:
        try:
            self.path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            logger.error(f"[STORE] Error writing {self.path}: {exc}")
            raise StorageError(f"Failed to save {self.path.name}") from exc
        logger.debug(f"[STORE] Wrote {len(records)} records to {self.path}")
