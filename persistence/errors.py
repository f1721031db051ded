from __future__ import annotations

from pathlib import Path


class ChirpStoreError(Exception):
    """Base class for every failure surfaced by the chirp store."""


class StoreIOError(ChirpStoreError):
    """The store file could not be created, read or written."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class StoreDecodeError(ChirpStoreError):
    """The store file is not valid JSON or does not have the expected shape."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class StoreEncodeError(ChirpStoreError):
    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class ChirpNotFoundError(ChirpStoreError, LookupError):
    def __init__(self, chirp_id: int):
        super().__init__(f"chirp {chirp_id} not found")
        self.chirp_id = chirp_id
