from __future__ import annotations

from .chirp_store import ChirpDataDoc, ChirpRecord, ChirpStore, DiskChirpStore, open_store
from .errors import (
    ChirpNotFoundError,
    ChirpStoreError,
    StoreDecodeError,
    StoreEncodeError,
    StoreIOError,
)
from .repositories import AsyncChirpRepository, AsyncDiskChirpRepository

__all__ = [
    "ChirpRecord",
    "ChirpDataDoc",
    "ChirpStore",
    "DiskChirpStore",
    "open_store",
    "AsyncChirpRepository",
    "AsyncDiskChirpRepository",
    "ChirpStoreError",
    "StoreIOError",
    "StoreDecodeError",
    "StoreEncodeError",
    "ChirpNotFoundError",
]
