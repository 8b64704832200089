from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from app.domain.entities import VerificationRecord
from app.domain.ports.verification_store import VerificationStorePort


class _KeyLock:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.holders = 0


class InMemoryVerificationStore(VerificationStorePort):
    """
    Process-wide pending-passcode store. Nothing survives a restart.

    Locks are created on demand per key and dropped once no coroutine
    holds or waits on them.
    """

    def __init__(self) -> None:
        self._records: dict[str, VerificationRecord] = {}
        self._locks: dict[str, _KeyLock] = {}

    @asynccontextmanager
    async def lock(self, key: str) -> AsyncIterator[None]:
        entry = self._locks.get(key)
        if entry is None:
            entry = self._locks[key] = _KeyLock()
        entry.holders += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.holders -= 1
            if entry.holders == 0:
                self._locks.pop(key, None)

    async def put(self, key: str, record: VerificationRecord) -> None:
        self._records[key] = record

    async def get(self, key: str) -> Optional[VerificationRecord]:
        return self._records.get(key)

    async def remove(self, key: str) -> None:
        self._records.pop(key, None)

    def __len__(self) -> int:
        return len(self._records)
