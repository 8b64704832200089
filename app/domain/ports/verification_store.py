from __future__ import annotations

from typing import AsyncContextManager, Optional, Protocol

from app.domain.entities import VerificationRecord


class VerificationStorePort(Protocol):
    """
    Pending passcodes keyed by normalized email.

    Callers hold `lock(key)` around any read-then-write sequence so that
    concurrent issue/verify calls for one key are serialized.
    """

    def lock(self, key: str) -> AsyncContextManager[None]:
        """Key-scoped mutual exclusion."""

    async def put(self, key: str, record: VerificationRecord) -> None:
        """Store/replace the record for key."""

    async def get(self, key: str) -> Optional[VerificationRecord]:
        """Return the record for key, or None."""

    async def remove(self, key: str) -> None:
        """Delete the record for key (no-op if absent)."""
