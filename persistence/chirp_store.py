from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping, Protocol

from pydantic import BaseModel, Field, StrictInt, StrictStr, ValidationError, field_validator

from .disk_store import DiskJsonDocumentStore
from .errors import ChirpNotFoundError, StoreDecodeError, StoreIOError
from .paths import default_db_path, ensure_dir

if TYPE_CHECKING:
    from settings import Settings

logger = logging.getLogger(__name__)


class ChirpRecord(BaseModel):
    # Strict so that true, "1" or 1.0 in the file are rejected rather than coerced.
    id: StrictInt
    body: StrictStr


class ChirpDataDoc(BaseModel):
    """
    Mirrors the on-disk database.json schema:
      { "chirps": { "<id>": { "id": 1, "body": "..." } } }

    JSON object keys are strings; they are parsed back to ints here.
    """

    chirps: dict[int, ChirpRecord] = Field(default_factory=dict)

    @field_validator("chirps", mode="before")
    @classmethod
    def _null_chirps_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @classmethod
    def from_disk_doc(cls, doc: Mapping[str, Any]) -> "ChirpDataDoc":
        return cls.model_validate(doc)

    def to_disk_doc(self) -> dict[str, Any]:
        return {"chirps": {str(k): v.model_dump(mode="json") for k, v in self.chirps.items()}}


class ChirpStore(Protocol):
    def create_chirp(self, body: str) -> ChirpRecord:
        ...

    def get_chirps(self) -> list[ChirpRecord]:
        ...

    def get_chirp(self, chirp_id: int) -> ChirpRecord:
        ...


class DiskChirpStore(ChirpStore):
    """
    Chirps kept in one JSON file, loaded in full on every call.

    Public methods take the path's read/write lock; `_load` and `_write`
    expect the caller to hold it already. Ids are `len(chirps) + 1`, which
    stays dense only because chirps are never deleted.
    """

    def __init__(self, path: Path, *, log_operations: bool = True):
        self._store = DiskJsonDocumentStore(Path(path))
        self._log_operations = log_operations
        if self._store.ensure():
            logger.info("CHIRP STORE: created empty database %s", self._store.path)

    @classmethod
    def open(cls, path: Path | str, *, log_operations: bool = True) -> "DiskChirpStore":
        return cls(Path(path), log_operations=log_operations)

    @property
    def path(self) -> Path:
        return self._store.path

    def create_chirp(self, body: str) -> ChirpRecord:
        with self._store.lock.write_locked():
            doc = self._load()
            chirp = ChirpRecord(id=len(doc.chirps) + 1, body=body)
            doc.chirps[chirp.id] = chirp
            self._write(doc)
        if self._log_operations:
            logger.debug("CHIRP STORE: created chirp id=%s in %s", chirp.id, self.path)
        return chirp

    def get_chirps(self) -> list[ChirpRecord]:
        with self._store.lock.read_locked():
            doc = self._load()
        chirps = sorted(doc.chirps.values(), key=lambda c: c.id)
        if self._log_operations:
            logger.debug("CHIRP STORE: loaded %s chirps from %s", len(chirps), self.path)
        return chirps

    def get_chirp(self, chirp_id: int) -> ChirpRecord:
        with self._store.lock.read_locked():
            doc = self._load()
        chirp = doc.chirps.get(chirp_id)
        if chirp is None:
            raise ChirpNotFoundError(chirp_id)
        return chirp

    def _load(self) -> ChirpDataDoc:
        raw = self._store.load_unlocked()
        try:
            return ChirpDataDoc.from_disk_doc(raw)
        except ValidationError as e:
            logger.warning("CHIRP STORE: unexpected document shape in %s: %s", self.path, e)
            raise StoreDecodeError(self.path, f"unexpected document shape: {e.error_count()} error(s)") from e

    def _write(self, doc: ChirpDataDoc) -> None:
        self._store.save_unlocked(doc.to_disk_doc())


def open_store(settings: "Settings | None" = None) -> DiskChirpStore:
    """
    Build the store described by `settings` (defaults to `settings.get_settings()`).

    Creates the parent directory, and when `debug_reset_db` is set removes any
    existing database first.
    """
    if settings is None:
        from settings import get_settings

        settings = get_settings()

    path = Path(settings.db_path) if settings.db_path is not None else default_db_path()
    try:
        ensure_dir(path.parent)
        if settings.debug_reset_db and path.exists():
            path.unlink()
            logger.info("CHIRP STORE: debug reset removed %s", path)
    except (OSError, ValueError) as e:
        raise StoreIOError(path, f"cannot prepare database location: {getattr(e, 'strerror', None) or e}") from e

    return DiskChirpStore(path, log_operations=settings.log_operations)
