"""JSON file storage backend.

Stores every key in a single JSON object on disk:
    {"exercises": "<serialized>", "overrides": "<serialized>", ...}

Values stay opaque strings, mirroring browser local storage.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from loguru import logger

from workout_calendar.storage.base import StorageReadError, StorageWriteError


class JsonFileStorage:
    """KeyValueStorage persisted to a JSON document."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_document(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"[STORAGE] Ignoring unreadable storage file {self.path}: {e}")
            return {}
        except OSError as e:
            raise StorageReadError(str(self.path), str(e)) from e

        if not isinstance(document, dict):
            logger.warning(f"[STORAGE] Ignoring storage file {self.path}: top-level value is not an object")
            return {}
        return {str(k): v for k, v in document.items() if isinstance(v, str)}

    def _write_document(self, document: dict[str, str], key: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        except OSError as e:
            raise StorageWriteError(key, str(e)) from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageWriteError(key, str(e)) from e

    def get(self, key: str) -> str | None:
        return self._read_document().get(key)

    def set(self, key: str, value: str) -> None:
        document = self._read_document()
        document[key] = value
        self._write_document(document, key)

    def delete(self, key: str) -> None:
        document = self._read_document()
        if key in document:
            del document[key]
            self._write_document(document, key)

    def keys(self) -> list[str]:
        return list(self._read_document())
