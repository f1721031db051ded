from __future__ import annotations

import asyncio
from typing import Protocol

from .chirp_store import ChirpRecord, ChirpStore, open_store


class AsyncChirpRepository(Protocol):
    async def create_chirp(self, body: str) -> ChirpRecord: ...
    async def get_chirps(self) -> list[ChirpRecord]: ...
    async def get_chirp(self, chirp_id: int) -> ChirpRecord: ...


class AsyncDiskChirpRepository(AsyncChirpRepository):
    """
    Async wrapper around the disk-backed chirp store.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O.
    """

    def __init__(self, store: ChirpStore | None = None) -> None:
        self._store = store if store is not None else open_store()

    async def create_chirp(self, body: str) -> ChirpRecord:
        return await asyncio.to_thread(self._store.create_chirp, body)

    async def get_chirps(self) -> list[ChirpRecord]:
        return await asyncio.to_thread(self._store.get_chirps)

    async def get_chirp(self, chirp_id: int) -> ChirpRecord:
        return await asyncio.to_thread(self._store.get_chirp, chirp_id)
