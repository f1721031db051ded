from __future__ import annotations

from pathlib import Path
from typing import Any

from .errors import StoreDecodeError, StoreIOError
from .json_store import atomic_write_json, ensure_file, read_json
from .locks import GLOBAL_PATH_LOCKS, ReadWriteLock


class DiskJsonDocumentStore:
    """
    Stores a single JSON object on disk at a fixed path.

    - An empty file loads as an empty dict; anything that is not a JSON object
      raises StoreDecodeError.
    - `load_unlocked` / `save_unlocked` assume the caller already holds `lock`.
    """

    def __init__(self, path: Path):
        self._path = path
        try:
            self._lock = GLOBAL_PATH_LOCKS.lock_for(path)
        except (OSError, ValueError) as e:
            raise StoreIOError(path, f"invalid path: {e}") from e

    @property
    def path(self) -> Path:
        return self._path

    @property
    def lock(self) -> ReadWriteLock:
        return self._lock

    def ensure(self) -> bool:
        with self._lock.write_locked():
            return ensure_file(self._path)

    def load_unlocked(self) -> dict[str, Any]:
        raw = read_json(self._path)
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise StoreDecodeError(self._path, f"expected a JSON object, got {type(raw).__name__}")
        return raw

    def save_unlocked(self, doc: dict[str, Any]) -> None:
        atomic_write_json(self._path, doc)
