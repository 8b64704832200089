from __future__ import annotations

from typing import Optional, Protocol

from app.domain.entities import Customer


class SessionStorePort(Protocol):
    async def create(self, customer: Customer) -> str:
        """Open a session for customer and return its bearer token."""

    async def get(self, token: str) -> Optional[Customer]:
        """Customer bound to token, or None if unknown/expired."""

    async def revoke(self, token: str) -> None:
        """Drop the session (no-op if absent)."""
