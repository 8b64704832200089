from __future__ import annotations

import json
import secrets
from dataclasses import asdict
from typing import Optional

from redis.asyncio import Redis

from app.domain.entities import Customer
from app.domain.ports.session_store import SessionStorePort


class RedisSessions(SessionStorePort):
    def __init__(
        self, redis: Redis, *, key_prefix: str = "sess:", ttl_seconds: int = 86400
    ) -> None:
        self._redis = redis
        self._prefix = key_prefix
        self._ttl = ttl_seconds

    def _key(self, token: str) -> str:
        return f"{self._prefix}{token}"

    async def create(self, customer: Customer) -> str:
        token = secrets.token_urlsafe(32)
        await self._redis.set(
            self._key(token), json.dumps(asdict(customer)), ex=self._ttl
        )
        return token

    async def get(self, token: str) -> Optional[Customer]:
        raw = await self._redis.get(self._key(token))
        if raw is None:
            return None
        return Customer(**json.loads(raw))

    async def revoke(self, token: str) -> None:
        await self._redis.delete(self._key(token))
